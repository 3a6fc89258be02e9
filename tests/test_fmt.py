import pytest

from copyhead.core.fmt import DEFAULT_WIDTH, fmt, reflow

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec "
    "hendrerit blandit metus, sed iaculis nisl pulvinar at. Suspendisse id "
    "nibh ut tellus rhoncus consequat. Vivamus dignissim nulla id nisl "
    "condimentum, eget suscipit ante laoreet. Integer egestas eu arcu sit "
    "amet sodales. Proin sagittis auctor dictum. Duis maximus nisl tortor. "
    "Phasellus tristique elementum pretium. In eget feugiat sapien. "
    "Integer mollis justo vel ante mattis laoreet."
)

LOREM_WRAPPED = """\
Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec hendrerit
blandit metus, sed iaculis nisl pulvinar at. Suspendisse id nibh ut tellus
rhoncus consequat. Vivamus dignissim nulla id nisl condimentum, eget
suscipit ante laoreet. Integer egestas eu arcu sit amet sodales. Proin
sagittis auctor dictum. Duis maximus nisl tortor. Phasellus tristique
elementum pretium. In eget feugiat sapien. Integer mollis justo vel ante
mattis laoreet."""

LOREM_PARAGRAPHS = """\
Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec hendrerit blandit metus, sed iaculis nisl pulvinar at. Suspendisse id nibh ut tellus rhoncus consequat. Vivamus dignissim nulla id nisl condimentum, eget suscipit ante laoreet. Integer egestas eu arcu sit amet sodales. Proin sagittis auctor dictum. Duis maximus nisl tortor. Phasellus tristique elementum pretium. In eget feugiat sapien. Integer mollis justo vel ante mattis laoreet.

Suspendisse orci est, congue ut justo in, condimentum elementum ante. Nullam commodo metus dolor, at molestie odio faucibus sit amet. Nulla quis risus vitae massa vulputate egestas. Phasellus urna arcu, condimentum eget nisi a, mollis scelerisque lorem. Nam tempor, eros et dictum facilisis, leo justo faucibus turpis, a luctus odio arcu posuere augue. Nulla vel ante sed mi viverra tempor. Curabitur at molestie mi.

Suspendisse potenti. Proin nisl sapien, ornare a ligula non, mollis vulputate enim. Mauris sed nisi condimentum tortor tincidunt scelerisque eget non velit. Morbi eu molestie orci. Suspendisse volutpat aliquet tortor, sed convallis libero tincidunt ut. Cras mollis eleifend mauris, sit amet efficitur eros eleifend vitae. In vitae est sed lectus cursus pulvinar vitae eget nibh. Ut velit neque, efficitur at facilisis sit amet, interdum ut turpis. Nunc consequat ligula at lacus scelerisque blandit. Nullam luctus sed nulla ut vestibulum. Nam nec lobortis tortor, ac tincidunt libero. Fusce ullamcorper, purus ac vestibulum efficitur, massa nulla tincidunt lectus, at laoreet nunc nisl in risus. Suspendisse tincidunt libero a orci mattis, sagittis ultricies dolor vehicula. Nulla faucibus tincidunt est, vitae blandit arcu imperdiet a.

Aliquam mollis, elit porttitor volutpat tempor, lectus purus tempor tellus, at mollis risus massa eget erat. Aenean hendrerit, lacus in tempus accumsan, magna lectus congue nunc, eget lacinia magna erat a justo. Cras vitae neque arcu. Donec vitae fermentum odio, et aliquet libero. Morbi porttitor ligula id sapien euismod, ac vestibulum felis vestibulum. Aliquam ac turpis est. Fusce egestas libero ut dui hendrerit volutpat. Aliquam congue ipsum neque, vitae tincidunt nisi sollicitudin vitae. Ut a tincidunt elit, vel dictum leo. Sed maximus arcu nibh, id pellentesque justo accumsan vel. Fusce blandit felis in libero consectetur, a suscipit est cursus. Ut quis faucibus eros. Aliquam ut luctus orci. Cras tellus eros, lobortis quis massa eget, congue condimentum mauris. Integer tempus viverra nisi eu facilisis.

Proin bibendum sem quis leo commodo, sit amet gravida tellus lacinia. Integer et magna sit amet elit lobortis egestas. Curabitur non ultricies nisl, in convallis tellus. Duis bibendum, nisi vel egestas placerat, nibh orci varius risus, quis sagittis turpis nunc quis metus. Quisque id lorem pellentesque, lobortis risus vel, sagittis nisi. Fusce non consequat lorem. Suspendisse ornare, orci vel dictum maximus, turpis erat fringilla nisi, in aliquet justo dui ac turpis. Nunc sagittis congue mi a consectetur. Aliquam eget sapien augue. Donec sit amet mattis dui."""

LOREM_PARAGRAPHS_WRAPPED = """\
Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec hendrerit
blandit metus, sed iaculis nisl pulvinar at. Suspendisse id nibh ut tellus
rhoncus consequat. Vivamus dignissim nulla id nisl condimentum, eget
suscipit ante laoreet. Integer egestas eu arcu sit amet sodales. Proin
sagittis auctor dictum. Duis maximus nisl tortor. Phasellus tristique
elementum pretium. In eget feugiat sapien. Integer mollis justo vel ante
mattis laoreet.

Suspendisse orci est, congue ut justo in, condimentum elementum ante.
Nullam commodo metus dolor, at molestie odio faucibus sit amet. Nulla
quis risus vitae massa vulputate egestas. Phasellus urna arcu, condimentum
eget nisi a, mollis scelerisque lorem. Nam tempor, eros et dictum
facilisis, leo justo faucibus turpis, a luctus odio arcu posuere augue.
Nulla vel ante sed mi viverra tempor. Curabitur at molestie mi.

Suspendisse potenti. Proin nisl sapien, ornare a ligula non, mollis
vulputate enim. Mauris sed nisi condimentum tortor tincidunt scelerisque
eget non velit. Morbi eu molestie orci. Suspendisse volutpat aliquet
tortor, sed convallis libero tincidunt ut. Cras mollis eleifend mauris,
sit amet efficitur eros eleifend vitae. In vitae est sed lectus cursus
pulvinar vitae eget nibh. Ut velit neque, efficitur at facilisis sit
amet, interdum ut turpis. Nunc consequat ligula at lacus scelerisque
blandit. Nullam luctus sed nulla ut vestibulum. Nam nec lobortis tortor,
ac tincidunt libero. Fusce ullamcorper, purus ac vestibulum efficitur,
massa nulla tincidunt lectus, at laoreet nunc nisl in risus. Suspendisse
tincidunt libero a orci mattis, sagittis ultricies dolor vehicula. Nulla
faucibus tincidunt est, vitae blandit arcu imperdiet a.

Aliquam mollis, elit porttitor volutpat tempor, lectus purus tempor
tellus, at mollis risus massa eget erat. Aenean hendrerit, lacus in tempus
accumsan, magna lectus congue nunc, eget lacinia magna erat a justo. Cras
vitae neque arcu. Donec vitae fermentum odio, et aliquet libero. Morbi
porttitor ligula id sapien euismod, ac vestibulum felis vestibulum.
Aliquam ac turpis est. Fusce egestas libero ut dui hendrerit volutpat.
Aliquam congue ipsum neque, vitae tincidunt nisi sollicitudin vitae. Ut
a tincidunt elit, vel dictum leo. Sed maximus arcu nibh, id pellentesque
justo accumsan vel. Fusce blandit felis in libero consectetur, a suscipit
est cursus. Ut quis faucibus eros. Aliquam ut luctus orci. Cras tellus
eros, lobortis quis massa eget, congue condimentum mauris. Integer tempus
viverra nisi eu facilisis.

Proin bibendum sem quis leo commodo, sit amet gravida tellus lacinia.
Integer et magna sit amet elit lobortis egestas. Curabitur non ultricies
nisl, in convallis tellus. Duis bibendum, nisi vel egestas placerat, nibh
orci varius risus, quis sagittis turpis nunc quis metus. Quisque id lorem
pellentesque, lobortis risus vel, sagittis nisi. Fusce non consequat
lorem. Suspendisse ornare, orci vel dictum maximus, turpis erat fringilla
nisi, in aliquet justo dui ac turpis. Nunc sagittis congue mi a consectetur.
Aliquam eget sapien augue. Donec sit amet mattis dui."""

APACHE_BOILERPLATE = """\
Copyright [yyyy] [name of copyright owner]

Licensed under the Apache License, Version 2.0 (the "License");
You may not use this file except in compliance with the License.
You may obtain a copy of the License at

http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License."""


def test_fmt_wraps_a_paragraph():
    assert fmt(LOREM) == LOREM_WRAPPED


def test_fmt_wraps_multiple_paragraphs():
    assert fmt(LOREM_PARAGRAPHS) == LOREM_PARAGRAPHS_WRAPPED


def test_fmt_empty_text():
    assert fmt("") == ""
    assert fmt("  \n\n \n") == ""


def test_fmt_leaves_formatted_paragraphs_alone():
    assert fmt(APACHE_BOILERPLATE) == APACHE_BOILERPLATE


def test_fmt_is_idempotent_on_short_lines():
    text = "Hello world.\n\nA second paragraph\nwith two lines."
    assert fmt(text) == text


def test_fmt_collapses_blank_line_runs_and_trailing_space():
    assert fmt("one   \n\n\n\n   \n\ntwo  ") == "one\n\ntwo"


def test_fmt_never_merges_physical_lines():
    assert fmt("short\nlines\nstay", target=40) == "short\nlines\nstay"


def test_fmt_indents_continuation_lines_of_list_items():
    text = "  (a) alpha beta gamma delta epsilon zeta eta theta"
    assert fmt(text, target=20) == (
        "  (a) alpha beta\n"
        "      gamma delta\n"
        "      epsilon zeta\n"
        "      eta theta"
    )


def test_fmt_keeps_existing_continuation_indent():
    wrapped = "  (a) alpha beta\n      gamma delta\n      epsilon zeta\n      eta theta"
    assert fmt(wrapped, target=20) == wrapped


@pytest.mark.parametrize(
    "text, target",
    [
        ("  (a) dolor dolor lorem dolor dolor incididunt elit. amet, sit lorem dolor", 72),
        ("  (a) alpha beta gamma delta epsilon zeta eta theta", 20),
        ("  1. " + "word " * 30, 40),
        ("    indented abcdefghijklmnopqrstuvwxyz and more words", 16),
        (LOREM, 72),
    ],
)
def test_fmt_is_idempotent(text, target):
    once = fmt(text, target=target)
    assert fmt(once, target=target) == once


@pytest.mark.parametrize(
    "marker",
    ["  1. ", "  a. ", "  B. ", "  (2) ", "  (iv) ", "    "],
)
def test_fmt_list_marker_sets_indent(marker):
    text = marker + "word " * 30
    lines = fmt(text, target=40).split("\n")
    assert len(lines) > 1
    assert all(line.startswith(" " * len(marker)) for line in lines[1:])


def test_fmt_prefers_long_break_when_cheaper():
    assert fmt("abc defghijkl mn", target=10) == "abc defghijkl\nmn"


def test_fmt_hard_cuts_unbreakable_lines():
    assert fmt("abcdefghijklmnopqrstuvwxyz", target=10) == "abcdefghij\nklmnopqrst\nuvwxyz"


def test_fmt_default_width():
    assert DEFAULT_WIDTH == 72
    assert fmt(LOREM, target=0) == LOREM_WRAPPED
    assert reflow is fmt
