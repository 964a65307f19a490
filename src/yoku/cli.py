"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from yoku import tui
from yoku.config import CliOverrides, load_effective_config
from yoku.session import TodoSession, create_session
from yoku.workspace import WorkspaceLoadError, bootstrap_data_dir, load_workspace


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for startup configuration."""
    parser = argparse.ArgumentParser(prog="yoku", description="TUI Markdown Todo")
    parser.add_argument("-p", "--path", required=False, default=None, help="data directory")
    parser.add_argument(
        "-d",
        "--data-path",
        action="store_true",
        help="print the effective data directory and exit",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="print the effective configuration as JSON and exit",
    )
    parser.add_argument("--no-audit", action="store_true", help="disable the audit log")
    return parser


def report_save(session: TodoSession) -> int:
    """Save the session and print per-file failures; returns the exit status."""
    report = session.save()
    for failure in report.failures:
        print(
            f"error: could not {failure.operation} {failure.path}: {failure.reason}",
            file=sys.stderr,
        )
    return 0 if report.ok else 1


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the yoku terminal application."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        data_dir=Path(args.path) if args.path else None,
        audit_enabled=False if args.no_audit else None,
    )
    try:
        config = load_effective_config(overrides=overrides)
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2

    if args.data_path:
        print(f'Current default data path is "{config.data_dir}"')
        return 0
    if args.show_config:
        print(json.dumps(config.to_public_dict(), indent=2, sort_keys=True))
        return 0

    try:
        starter = bootstrap_data_dir(config)
        workspace = load_workspace(config.data_dir, extension=config.storage.extension)
    except WorkspaceLoadError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    if starter is not None:
        print(f"Created starter list: {starter}")

    session = create_session(config, workspace)
    if not tui.run(session):
        return 0
    return report_save(session)


if __name__ == "__main__":
    raise SystemExit(main())
