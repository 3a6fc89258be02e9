import pytest

from copyhead.core.comment_styles import style_for
from copyhead.core.patterns import (
    copyright_header_regex,
    find_copyright_header,
    find_preamble,
    preamble_regex,
)

APACHE_BLOCK = """\
/*
 * Copyright © 2020 Atomist, Inc.
 *
 * Licensed under the Apache License, Version 2.0 (the "License");
 * you may not use this file except in compliance with the License.
 * You may obtain a copy of the License at
 *
 *     http://www.apache.org/licenses/LICENSE-2.0
 *
 * Unless required by applicable law or agreed to in writing, software
 * distributed under the License is distributed on an "AS IS" BASIS,
 * WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
 * See the License for the specific language governing permissions and
 * limitations under the License.
 */
"""

GPL_LISP = """\
;; Copyright (c) 1999 Atomist, Inc.
;;
;; This program is free software: you can redistribute it and/or modify
;; it under the terms of the GNU General Public License as published by
;; the Free Software Foundation, either version 3 of the License, or
;; (at your option) any later version.
;;
;; This program is distributed in the hope that it will be useful,
;; but WITHOUT ANY WARRANTY; without even the implied warranty of
;; MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
;; GNU General Public License for more details.
;;
;; You should have received a copy of the GNU General Public License
;; along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

MIT_SCRIPT = """\
# Copyright © 2015 Atomist, Inc.
#
# Licensed under the MIT license;
# you may not use this file except in compliance with the License.
"""


def test_matches_c_block_header():
    content = APACHE_BLOCK + '\nimport * as assert from "power-assert";\n'
    m = copyright_header_regex("//").search(content)
    assert m is not None
    assert m.group(0) == APACHE_BLOCK
    assert m.group(1) is None
    assert m.group(2) == "2020"

    found = find_copyright_header(content, style_for("ts"))
    assert found is not None
    assert found.span == (0, len(APACHE_BLOCK))
    assert found.year == "2020"
    assert found.block


def test_matches_c_line_header():
    header = (
        "// Copyright (C) 2020 Atomist, Inc.\n"
        "//\n"
        '// Licensed under the BSD 3-Clause "New" or "Revised" License;\n'
        "// you may not use this file except in compliance with the License.\n"
    )
    content = header + "#include <stdio.h>;\nint main() {\n    return 0;\n}\n"
    m = copyright_header_regex("//").search(content)
    assert m is not None
    assert m.group(0) == header
    assert m.group(1) == "2020"
    assert m.group(2) is None

    found = find_copyright_header(content, style_for("c"))
    assert found is not None
    assert not found.block


def test_matches_script_header_after_shebang():
    content = "#! /bin/bash\n" + MIT_SCRIPT + "\ndeclare Pkg=something\n"
    rx = copyright_header_regex("#")
    assert rx.groups == 1
    m = rx.search(content)
    assert m is not None
    assert m.group(0) == MIT_SCRIPT
    assert m.group(1) == "2015"


def test_matches_lisp_header_after_description():
    content = ";; This does something\n" + GPL_LISP + "\n \n(cdr 'x)\n"
    m = copyright_header_regex(";").search(content)
    assert m is not None
    assert m.group(0) == GPL_LISP
    assert m.group(1) == "1999"


def test_matches_script_header_after_some_guff():
    header = MIT_SCRIPT.replace("MIT license", "MIT License")
    content = (
        "#! /bin/bash\n# Some guff\n# that describes what this\n# script does\n\n"
        "set -o pipefail\n\n" + header + "\ndeclare Pkg=something\n"
    )
    m = copyright_header_regex("#").search(content)
    assert m is not None
    assert m.group(0) == header
    assert m.group(1) == "2015"


def test_header_year_is_first_year_on_the_line():
    content = "# Copyright 2015-2021 Acme\n"
    assert find_copyright_header(content, style_for("py")).year == "2015"


def test_header_match_is_case_insensitive_and_needs_a_year():
    assert find_copyright_header("# COPYRIGHT 1999 Acme\n", style_for("sh")).year == "1999"
    assert find_copyright_header("# Copyright Acme\n", style_for("sh")) is None
    assert find_copyright_header("# Copyrighted 1999\n", style_for("sh")) is None


def test_other_dialects_match_their_own_prefix():
    assert find_copyright_header("-- Copyright 2001 Acme\nselect 1;\n", style_for("sql")).year == "2001"
    assert find_copyright_header("% Copyright 2001 Acme\n", style_for("tex")).year == "2001"
    assert find_copyright_header("# Copyright 2001 Acme\n", style_for("sql")) is None


@pytest.mark.parametrize(
    "prefix, content",
    [
        ("#", 'import * from "fs";\nconsole.log("real code");\n'),
        ("//", '#include <stdio.h>\n\nint main() {\n  printf("Nothing\n");\n  return 0;\n}\n'),
        (";", "\n\n(let (x '0)\n  x)\n"),
    ],
)
def test_preamble_does_not_match_code(prefix, content):
    assert preamble_regex(prefix).match(content) is None


def test_preamble_matches_shebang():
    m = preamble_regex("#").match("#! /bin/sh\n\nset +e\nexit 0\n")
    assert m is not None
    assert m.group(0) == "#! /bin/sh\n"


@pytest.mark.parametrize(
    "prefix, content, expected",
    [
        (
            "#",
            '# super fun script\n# that does super cool things\n\necho "real code"\n',
            "# super fun script\n# that does super cool things\n",
        ),
        (
            "//",
            "// this code needs compiled\n// or you can just\n//think about it\n\n// more\n#include <stdio.h>\n",
            "// this code needs compiled\n// or you can just\n//think about it\n",
        ),
        (
            ";",
            ";; lisp lisping lispy lisps\n(let (x '0)\n  x)\n",
            ";; lisp lisping lispy lisps\n",
        ),
        (
            "//",
            "/* this code needs compiled\n * or you can just\n * think about it\n\n * more */\n#include <stdio.h>\n",
            "/* this code needs compiled\n * or you can just\n * think about it\n\n * more */",
        ),
    ],
)
def test_preamble_matches_file_description_comments(prefix, content, expected):
    m = preamble_regex(prefix).match(content)
    assert m is not None
    assert m.group(0) == expected


def test_preamble_matches_shebang_and_description():
    content = "#! /bin/sh\n# this script does# not do much\nset +e\nexit 0\n"
    expected = "#! /bin/sh\n# this script does# not do much\n"
    assert find_preamble(content, style_for("sh")) == (0, len(expected))


def test_crlf_line_comments_stay_contiguous():
    content = "# one\r\n# two\r\ncode\r\n"
    assert find_preamble(content, style_for("py")) == (0, len("# one\r\n# two\r\n"))
