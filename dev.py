"""Development script to run checks (formatting, linting, tests)."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- Running Step: {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\n❌ Failed: {step_name}")
        sys.exit(1)


def run_ci_checks() -> None:
    """Run the read-only checks CI enforces."""
    run_command(["uv", "run", "ruff", "format", "--check"], "Ruff Format Check")
    run_command(["uv", "run", "ruff", "check"], "Ruff Lint")
    run_command(
        [
            "uv",
            "run",
            "pytest",
            "--cov=workspace_bins",
            "--cov-report=term-missing",
            "--cov-fail-under=85",
        ],
        "Tests",
    )


def main() -> None:
    """Format, fix, then run the CI checks."""
    parser = argparse.ArgumentParser(description="Run development checks.")
    parser.add_argument(
        "--ci", action="store_true", help="Run checks only, without rewriting files"
    )
    args = parser.parse_args()

    if not args.ci:
        run_command(["uv", "run", "ruff", "format"], "Ruff Formatting")
        run_command(
            ["uv", "run", "ruff", "check", "--fix", "--unsafe-fixes"],
            "Ruff Linting & Fixes",
        )

    run_ci_checks()
    print("\n✅ All development checks passed successfully.")


if __name__ == "__main__":
    main()
