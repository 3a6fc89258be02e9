import pytest

from copyhead.core.comment_styles import (
    COMMENT_STYLES,
    CommentStyle,
    build_extension_index,
    default_file_globs,
    known_extensions,
    style_for,
    style_for_path,
)


@pytest.mark.parametrize(
    "ext, prefix",
    [
        ("c", "//"),
        ("ts", "//"),
        ("kt", "//"),
        ("py", "#"),
        ("yaml", "#"),
        ("ksh", "#"),
        ("clj", ";"),
        ("cl", ";"),
        ("sql", "--"),
        ("tex", "%"),
    ],
)
def test_style_for_known_extensions(ext, prefix):
    style = style_for(ext)
    assert style is not None
    assert style.prefix == prefix


def test_style_for_normalizes_extension():
    assert style_for(".PY") is style_for("py")
    assert style_for(" Js ") is style_for("js")


def test_style_for_unknown_is_none():
    assert style_for("txt") is None
    assert style_for("") is None


def test_style_for_path_uses_final_suffix():
    assert style_for_path("src/app/main.test.ts").prefix == "//"
    assert style_for_path("Makefile") is None
    assert style_for_path(".bashrc") is None
    assert style_for_path("dir.d/README") is None


def test_only_c_family_supports_block_comments():
    assert style_for("java").supports_block
    assert not style_for("py").supports_block


def test_styles_partition_extensions():
    seen = set()
    for style in COMMENT_STYLES:
        assert not (seen & style.extensions)
        seen |= style.extensions
    assert sorted(seen) == known_extensions()


def test_duplicate_extension_is_rejected():
    a = CommentStyle(prefix="#", family="A", extensions=frozenset({"x"}))
    b = CommentStyle(prefix="//", family="B", extensions=frozenset({"x"}))
    with pytest.raises(ValueError):
        build_extension_index([a, b])


def test_default_file_globs_cover_every_extension():
    globs = default_file_globs()
    assert "**/*.py" in globs
    assert len(globs) == len(known_extensions())
