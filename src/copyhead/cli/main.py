# main.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..core.config import load_config_from_path
from ..core.interfaces import PushInfo
from ..core.log import configure_logging
from .runner import (
    detect_repo_license,
    make_local_config,
    reflow_text,
    render_header,
    run_config,
)


def _add_push_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--sha", help="Commit at the tip of the push (default: HEAD).")
    parser.add_argument(
        "--commits",
        type=int,
        default=1,
        help="Number of commits in the push (default: 1).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level copyhead CLI argument parser.

    Configures subcommands for config-driven runs, ad-hoc header fixes,
    header rendering, text reflow and license detection.

    Returns:
        argparse.ArgumentParser: Configured argument parser for the CLI.
    """
    parser = argparse.ArgumentParser(prog="copyhead", description="Copyright license header tool")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g., DEBUG, INFO, WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_p = subparsers.add_parser("run", help="Run from a config file")
    run_p.add_argument("-c", "--config", required=True, help="Path to config file (TOML, JSON or YAML).")
    run_p.add_argument("root", nargs="?", default=".", help="Repository root (default: current directory).")
    _add_push_args(run_p)
    run_p.add_argument("--dry-run", action="store_true", help="Update files but never commit them.")

    fix_p = subparsers.add_parser("fix", help="Add or update copyright headers in a repository.")
    fix_p.add_argument("root", help="Repository root.")
    fix_p.add_argument("--license", dest="license_id", help="SPDX license id (default: detect from LICENSE).")
    fix_p.add_argument("--holder", help="Copyright holder (default: repository owner).")
    fix_p.add_argument("--glob", action="append", default=[], help="File glob to manage; repeatable.")
    fix_p.add_argument("--ignore", action="append", default=[], help="File glob to skip; repeatable.")
    fix_p.add_argument(
        "--all-files",
        action="store_true",
        help="Add missing headers to every matching file, not just changed ones.",
    )
    fix_p.add_argument("--block-comment", action="store_true", help="Use /* ... */ headers where supported.")
    _add_push_args(fix_p)
    fix_p.add_argument("--commit", action="store_true", help="Commit the fixes to a dedicated branch.")

    header_p = subparsers.add_parser("header", help="Print the header for a license.")
    header_p.add_argument("--license", dest="license_id", required=True, help="SPDX license id.")
    header_p.add_argument("--holder", required=True, help="Copyright holder.")
    header_p.add_argument("--ext", help="File extension selecting the comment style, e.g. 'py'.")
    header_p.add_argument("--block-comment", action="store_true", help="Use a block comment where supported.")

    reflow_p = subparsers.add_parser("reflow", help="Re-wrap text paragraphs.")
    reflow_p.add_argument("file", nargs="?", help="Input file (default: standard input).")
    reflow_p.add_argument("--width", type=int, default=72, help="Target line width (default: 72).")

    detect_p = subparsers.add_parser("detect-license", help="Identify a repository's license file.")
    detect_p.add_argument("root", help="Repository root.")

    return parser


def _push_from_args(args: argparse.Namespace) -> PushInfo:
    return PushInfo(sha=args.sha, commits=max(1, args.commits))


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch a parsed CLI command to the appropriate handler.

    Args:
        args (argparse.Namespace): Parsed arguments from the top-level
            argument parser.

    Returns:
        int: Process exit code, where 0 indicates success and non-zero
        values indicate failure.
    """
    configure_logging(level=args.log_level)
    cmd = args.command

    if cmd == "run":
        cfg = load_config_from_path(args.config)
        result = run_config(cfg, args.root, push=_push_from_args(args), dry_run=args.dry_run)
        print(json.dumps(result.as_dict(), indent=2))
        return 0 if result.ok else 1

    if cmd == "fix":
        cfg = make_local_config(
            license_id=args.license_id,
            copyright_holder=args.holder,
            file_globs=args.glob,
            ignore_globs=args.ignore,
            only_changed=not args.all_files,
            block_comment=args.block_comment,
            commit=args.commit,
        )
        result = run_config(cfg, args.root, push=_push_from_args(args))
        print(json.dumps(result.as_dict(), indent=2))
        return 0 if result.ok else 1

    if cmd == "header":
        sys.stdout.write(
            render_header(
                args.license_id,
                args.holder,
                extension=args.ext,
                block_comment=args.block_comment,
            )
        )
        return 0

    if cmd == "reflow":
        if args.file:
            text = Path(args.file).read_text(encoding="utf-8")
        else:
            text = sys.stdin.read()
        out = reflow_text(text, args.width)
        sys.stdout.write(out + "\n" if out else "")
        return 0

    if cmd == "detect-license":
        found = detect_repo_license(args.root)
        print(json.dumps(found, indent=2))
        return 0 if found["license"] else 1

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the copyhead command-line interface.

    Parses arguments, dispatches to the selected subcommand, and returns
    an appropriate process exit code.

    Args:
        argv (Sequence[str] | None): Optional list of argument strings to
            parse instead of ``sys.argv[1:]``. Primarily useful for tests.

    Returns:
        int: Process exit code, where 0 indicates success and non-zero
        values indicate failure.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        return _dispatch(args)
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
