# license_headers.py
# SPDX-License-Identifier: MIT
"""Curated license usage texts keyed by SPDX identifier.

Each template is the short notice a license recommends placing at the top
of source files, already wrapped by hand. ``%YEAR%`` and
``%COPYRIGHT_HOLDER%`` are substituted when a header is generated. Licenses
without an entry here get a synthesized header instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

__all__ = [
    "YEAR_PLACEHOLDER",
    "HOLDER_PLACEHOLDER",
    "LICENSE_HEADERS",
    "template_for",
]

YEAR_PLACEHOLDER = "%YEAR%"
HOLDER_PLACEHOLDER = "%COPYRIGHT_HOLDER%"

_COPYRIGHT_LINE = f"Copyright © {YEAR_PLACEHOLDER} {HOLDER_PLACEHOLDER}"

_AGPL_3 = f"""{_COPYRIGHT_LINE}

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>."""

_APACHE_2 = f"""{_COPYRIGHT_LINE}

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License."""

_ECL_2 = f"""{_COPYRIGHT_LINE} Licensed under the
Educational Community License, Version 2.0 (the "License"); you may
not use this file except in compliance with the License. You may
obtain a copy of the License at

    http://www.osedu.org/licenses/ECL-2.0

Unless required by applicable law or agreed to in writing,
software distributed under the License is distributed on an "AS IS"
BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express
or implied. See the License for the specific language governing
permissions and limitations under the License."""

_GPL_1 = f"""{_COPYRIGHT_LINE}

This program is free software; you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation; either version 1, or (at your option)
any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program; if not, write to the Free Software
Foundation, Inc., 675 Mass Ave, Cambridge, MA 02139, USA."""

_GPL_2 = f"""{_COPYRIGHT_LINE}

This program is free software; you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation; either version 2 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License along
with this program; if not, write to the Free Software Foundation, Inc.,
51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA."""

_GPL_3 = f"""{_COPYRIGHT_LINE}

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>."""

_IMAGEMAGICK = f"""{_COPYRIGHT_LINE}

Licensed under the ImageMagick License (the "License"); you may not use
this file except in compliance with the License. You may obtain a copy
of the License at

  http://www.imagemagick.org/script/license.php

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
License for the specific language governing permissions and limitations
under the License."""

_LGPL_2 = f"""{_COPYRIGHT_LINE}

This library is free software; you can redistribute it and/or
modify it under the terms of the GNU Library General Public
License as published by the Free Software Foundation; either
version 2 of the License, or (at your option) any later version.

This library is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
Library General Public License for more details.

You should have received a copy of the GNU Library General Public
License along with this library; if not, write to the Free Software
Foundation, Inc., 51 Franklin St, Fifth Floor, Boston, MA 02110-1301, USA."""

# The LGPL-2.1 variants differ only in how the address line ends.
_LGPL_2_1_BODY = f"""{_COPYRIGHT_LINE}

This library is free software; you can redistribute it and/or
modify it under the terms of the GNU Lesser General Public
License as published by the Free Software Foundation; either
version 2.1 of the License, or (at your option) any later version.

This library is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public
License along with this library; if not, write to the Free Software
Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301"""

_MULAN_PSL_1 = f"""{_COPYRIGHT_LINE}

This software is licensed under the Mulan PSL v1.

You can use this software according to the terms and conditions of the
Mulan PSL v1.

You may obtain a copy of Mulan PSL v1 at:

    http://license.coscl.org.cn/MulanPSL

THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF
ANY KIND, EITHER EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO
NON-INFRINGEMENT, MERCHANTABILITY OR FIT FOR A PARTICULAR PURPOSE.

See the Mulan PSL v1 for more details."""

_SHL_0_5 = f"""{_COPYRIGHT_LINE}

Copyright and related rights are licensed under the Solderpad Hardware
License, Version 0.5 (the "License"); you may not use this file except
in compliance with the License. You may obtain a copy of the License
at http://solderpad.org/licenses/SHL-0.5. Unless required by
applicable law or agreed to in writing, software, hardware and
materials distributed under this License is distributed on an "AS IS"
BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
implied. See the License for the specific language governing
permissions and limitations under the License."""

_SHL_0_51 = f"""{_COPYRIGHT_LINE}

Copyright and related rights are licensed under the Solderpad Hardware
License, Version 0.51 (the "License"); you may not use this file
except in compliance with the License. You may obtain a copy of the
License at http://solderpad.org/licenses/SHL-0.51. Unless required by
applicable law or agreed to in writing, software, hardware and
materials distributed under this License is distributed on an "AS IS"
BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
implied. See the License for the specific language governing
permissions and limitations under the License."""


LICENSE_HEADERS: Mapping[str, str] = MappingProxyType({
    "AGPL-3.0": _AGPL_3,
    "AGPL-3.0-only": _AGPL_3,
    "AGPL-3.0-or-later": _AGPL_3,
    "Apache-2.0": _APACHE_2,
    "ECL-2.0": _ECL_2,
    "GPL-1.0": _GPL_1,
    "GPL-1.0+": _GPL_1,
    "GPL-1.0-only": _GPL_1,
    "GPL-1.0-or-later": _GPL_1,
    "GPL-2.0": _GPL_2,
    "GPL-2.0+": _GPL_2,
    "GPL-2.0-only": _GPL_2,
    "GPL-2.0-or-later": _GPL_2,
    "GPL-3.0": _GPL_3,
    "GPL-3.0+": _GPL_3,
    "GPL-3.0-only": _GPL_3,
    "GPL-3.0-or-later": _GPL_3,
    "ImageMagick": _IMAGEMAGICK,
    "LGPL-2.0": _LGPL_2,
    "LGPL-2.0+": _LGPL_2,
    "LGPL-2.0-only": _LGPL_2,
    "LGPL-2.0-or-later": _LGPL_2,
    "LGPL-2.1": _LGPL_2_1_BODY + " USA.",
    "LGPL-2.1+": _LGPL_2_1_BODY + " USA",
    "LGPL-2.1-only": _LGPL_2_1_BODY + ".",
    "LGPL-2.1-or-later": _LGPL_2_1_BODY + " USA",
    "MulanPSL-1.0": _MULAN_PSL_1,
    "SHL-0.5": _SHL_0_5,
    "SHL-0.51": _SHL_0_51,
})


def template_for(license_id: str) -> str | None:
    return LICENSE_HEADERS.get(license_id)
