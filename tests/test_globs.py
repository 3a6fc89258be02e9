import pytest

from copyhead.core.globs import GlobSet, compile_glob, filter_paths, glob_match


@pytest.mark.parametrize(
    "pattern, path, expected",
    [
        ("**/*.py", "setup.py", True),
        ("**/*.py", "pkg/sub/mod.py", True),
        ("**/*.py", "pkg/mod.pyc", False),
        ("**/*.py", ".hidden/mod.py", False),
        ("**/*.py", "pkg/.mod.py", False),
        ("src/*.ts", "src/index.ts", True),
        ("src/*.ts", "src/lib/index.ts", False),
        ("src/**", "src/lib/index.ts", True),
        ("{lib,src}/*.js", "lib/a.js", True),
        ("{lib,src}/*.js", "test/a.js", False),
        ("**/*.{c,h}", "include/x.h", True),
        ("file?.txt", "file1.txt", True),
        ("file?.txt", "file10.txt", False),
        ("file[0-9].txt", "file3.txt", True),
        ("[!a]b", "cb", True),
        ("[!a]b", "ab", False),
        ("a\\*b", "a*b", True),
        ("a\\*b", "axb", False),
        ("src/\\[x\\].py", "src/[x].py", True),
        ("src/\\[x\\].py", "src/x.py", False),
        ("notes\\?.md", "notes?.md", True),
        ("notes\\?.md", "notes1.md", False),
        ("src/*.py", "src\\x.py", True),
        ("./src/*.py", "src/x.py", True),
        ("src/*.py", "./src/x.py", True),
    ],
)
def test_glob_match(pattern, path, expected):
    assert glob_match(path, pattern) is expected


def test_dot_option_matches_hidden_segments():
    assert not glob_match(".github/ci.yml", "**/*.yml")
    assert glob_match(".github/ci.yml", "**/*.yml", dot=True)
    assert glob_match(".github/ci.yml", ".github/*.yml")


def test_compile_glob_is_cached():
    assert compile_glob("**/*.rs") is compile_glob("**/*.rs")


def test_globset_ignore_wins():
    selector = GlobSet(["**/*.ts"], ignore=["**/*.d.ts", ""])
    assert "src/a.ts" in selector
    assert "src/a.d.ts" not in selector
    assert 42 not in selector
    assert selector.ignore == ["**/*.d.ts"]


def test_filter_paths_keeps_input_order_and_drops_duplicates():
    paths = ["b.py", "README.md", "a.py", "b.py", "vendor/c.py"]
    assert filter_paths(paths, ["**/*.py"], ["vendor/**"]) == ["b.py", "a.py"]


def test_filter_paths_without_globs_selects_nothing():
    assert filter_paths(["a.py"], []) == []
