"""Entry point for linking workspace binaries, with optional development checks."""

import argparse
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path


def run_command(
    cmd_list: Sequence[str | Path], env: Mapping[str, str] | None = None
) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, env=env)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Optionally run the dev checks, then link binaries in the workspace."""
    parser = argparse.ArgumentParser(
        description="Link workspace dependency binaries into child projects.",
        epilog="All other options (--root, --use-link, ...) go to workspace-bins.",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before linking",
    )
    args, passthrough = parser.parse_known_args()

    root_dir = Path(__file__).parent

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([sys.executable, str(root_dir / "dev.py"), "--ci"])
        print("\nDevelopment checks passed. Proceeding with linking.\n")

    print("--- Linking workspace binaries ---")
    # Make the package importable without installing it
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(root_dir), env.get("PYTHONPATH", "")) if p
    )
    run_command([sys.executable, "-m", "workspace_bins.cli", *passthrough], env=env)


if __name__ == "__main__":
    main()
