"""Link the workspace root's dependency binaries into every child project.

Each immediate child directory holding a ``package.json`` gets the
executables of the root's dependencies in its own ``node_modules/.bin``,
either as symlinks or as ``sh``/``cmd`` wrapper scripts.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from workspace_bins.compute_config_hash import compute_config_hash
from workspace_bins.errors import WorkspaceBinsError
from workspace_bins.linker_config import (
    LinkerConfig,
    build_linker_config,
    parse_bool_text,
)
from workspace_bins.load_config import find_config_file, load_config
from workspace_bins.platform_profile import select_platform_profile
from workspace_bins.run_linking import run_linking
from workspace_bins.run_report import RunReport

logger = logging.getLogger(__name__)


class LinkerArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        """Print usage and the error to stderr, then exit with 1."""
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_bool(value: str) -> bool:
    """Parse a flag value such as ``true`` or ``false``."""
    parsed = parse_bool_text(value)
    if parsed is not None:
        return parsed
    msg = f"expected true or false, got {value!r}"
    raise argparse.ArgumentTypeError(msg)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        msg = f"expected a positive integer, got {value!r}"
        raise argparse.ArgumentTypeError(msg) from e
    if number < 1:
        msg = f"expected a positive integer, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the command line."""
    ap = LinkerArgumentParser(
        prog="workspace-bins",
        description=(
            "Link executables declared by the workspace root's dependencies into "
            "each child project's node_modules/.bin."
        ),
    )
    bool_flag = {"nargs": "?", "const": True, "default": None, "type": parse_bool}
    ap.add_argument(
        "--use-link",
        metavar="BOOL",
        help="Create symlinks (true) or wrapper scripts (false); platform default",
        **bool_flag,
    )
    ap.add_argument(
        "--create-cmd",
        metavar="BOOL",
        help="Also write Windows .cmd wrappers in script mode; platform default",
        **bool_flag,
    )
    ap.add_argument(
        "--force-binaries",
        metavar="BOOL",
        help="Link binaries even into projects that already depend on the package",
        **bool_flag,
    )
    ap.add_argument(
        "--root",
        type=Path,
        default=Path(),
        help="Workspace root (default: current directory)",
    )
    ap.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML configuration file (default: <root>/.workspace-bins.yml)",
    )
    ap.add_argument(
        "--concurrency",
        type=_positive_int,
        help="Maximum number of filesystem tasks in flight",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Plan and report without writing anything",
    )
    ap.add_argument(
        "--report",
        type=Path,
        help="Write a JSON report of the run to this path",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output and list every artifact written",
    )
    return ap


def config_from_args(args: argparse.Namespace) -> tuple[LinkerConfig, str]:
    """Resolve the run settings and the hash of the effective config."""
    root = args.root.resolve()
    config_path = args.config or find_config_file(root)
    config = load_config(config_path)
    linker_config = build_linker_config(
        root,
        config,
        select_platform_profile(),
        use_symlinks=args.use_link,
        create_commands=args.create_cmd,
        force_binaries=args.force_binaries,
        concurrency=args.concurrency,
        dry_run=args.dry_run,
    )
    return linker_config, compute_config_hash(linker_config.as_dict())


def main(argv: list[str] | None = None) -> int:
    """Run the linker and return the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config, config_hash = config_from_args(args)
        report = run_linking(config, RunReport(config_hash))
        if args.report:
            report.generate_report(args.report)
    except (WorkspaceBinsError, OSError) as e:
        logger.debug("Run failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    for line in report.summary_lines(verbose=args.verbose):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
