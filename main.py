# main.py
"""CLI entry point for the Forkpoint story direction engine."""

from __future__ import annotations

import argparse
import sys

from orchestration.cli_runner import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forkpoint",
        description="Suggest where a story could go next.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Detect genre, tone and three directions")
    source = analyze.add_mutually_exclusive_group()
    source.add_argument("--file", default=None, help="Path to a .txt or .pdf story")
    source.add_argument("--text", default=None, help="Story text")
    analyze.add_argument("--short-memory", default=None, help="Recent events summary")
    analyze.add_argument("--last-paragraph", default=None, help="Most recent paragraph")

    expand = subparsers.add_parser("expand", help="Preview how a chosen direction unfolds")
    context = expand.add_mutually_exclusive_group()
    context.add_argument("--file", default=None, help="Path to a .txt or .pdf story")
    context.add_argument("--context", dest="text", default=None, help="Story so far")
    expand.add_argument("--path-name", default="", help="Name of the chosen direction")
    expand.add_argument(
        "--path-description", default="", help="Description of the chosen direction"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse command-line arguments and run Forkpoint."""
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
