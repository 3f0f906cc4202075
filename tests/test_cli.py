"""End-to-end tests for the command line and the run orchestration."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import write_json

from workspace_bins.cli import build_parser, main, parse_bool
from workspace_bins.linker_config import LinkerConfig
from workspace_bins.run_linking import run_linking
from workspace_bins.run_report import RunReport


def _run(*args: str) -> int:
    with patch.object(sys, "argv", ["workspace-bins", *args]):
        return main()


def test_parse_bool() -> None:
    """Verify accepted spellings of boolean flag values."""
    assert parse_bool("true") is True
    assert parse_bool("FALSE") is False
    assert parse_bool("1") is True
    assert parse_bool("off") is False


def test_bool_flags_without_value_mean_true() -> None:
    """Verify ``--flag`` alone, ``--flag value`` and absence."""
    parser = build_parser()
    args = parser.parse_args(["--use-link", "--create-cmd", "false"])
    assert args.use_link is True
    assert args.create_cmd is False
    assert args.force_binaries is None


def test_bool_flag_rejects_garbage() -> None:
    """Verify that a non-boolean value is an argument error with exit code 1."""
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--use-link", "maybe"])
    assert excinfo.value.code == 1


def test_main_script_mode(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Verify wrapper scripts are written only where the rule allows."""
    ret = _run("--root", str(workspace), "--use-link", "false", "--create-cmd", "true")
    assert ret == 0

    app_bin = workspace / "app" / "node_modules" / ".bin"
    lib_bin = workspace / "lib" / "node_modules" / ".bin"
    assert sorted(p.name for p in lib_bin.iterdir()) == [
        "jest",
        "jest.cmd",
        "tsc",
        "tsc.cmd",
        "tsserver",
        "tsserver.cmd",
    ]
    # app already depends on typescript, so only jest is linked there
    assert sorted(p.name for p in app_bin.iterdir()) == ["jest", "jest.cmd"]
    assert not (workspace / "docs" / "node_modules").exists()

    out = capsys.readouterr().out
    assert "Dependencies with binaries found: typescript, jest" in out
    assert "app: linked 1, skipped 2" in out
    assert "lib: linked 3, skipped 0" in out


def test_main_force_binaries(workspace: Path) -> None:
    """Verify that --force-binaries links into projects that declare the package."""
    args = ("--root", str(workspace), "--use-link", "false", "--force-binaries")
    assert _run(*args) == 0
    app_bin = workspace / "app" / "node_modules" / ".bin"
    assert sorted(p.name for p in app_bin.iterdir()) == ["jest", "tsc", "tsserver"]


def test_main_symlink_mode(workspace: Path) -> None:
    """Verify that symlinks resolve to the dependency's executable."""
    assert _run("--root", str(workspace), "--use-link", "true") == 0
    link = workspace / "lib" / "node_modules" / ".bin" / "tsc"
    assert link.is_symlink()
    expected = workspace / "node_modules" / "typescript" / "bin" / "tsc"
    assert link.resolve() == expected.resolve()


def test_main_twice_is_byte_identical(workspace: Path) -> None:
    """Verify that re-running on an unchanged workspace rewrites the same bytes."""
    args = ("--root", str(workspace), "--use-link", "false", "--create-cmd")
    assert _run(*args) == 0
    lib_bin = workspace / "lib" / "node_modules" / ".bin"
    first = {p.name: p.read_bytes() for p in lib_bin.iterdir()}
    assert _run(*args) == 0
    second = {p.name: p.read_bytes() for p in lib_bin.iterdir()}
    assert first == second


def test_main_dry_run_writes_nothing(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that --dry-run reports but leaves the workspace untouched."""
    assert _run("--root", str(workspace), "--dry-run") == 0
    assert not (workspace / "lib" / "node_modules").exists()
    assert "lib: linked 3, skipped 0" in capsys.readouterr().out


def test_main_writes_json_report(workspace: Path, tmp_path: Path) -> None:
    """Verify that --report writes the JSON report."""
    report_path = tmp_path / "report.json"
    ret = _run("--root", str(workspace), "--dry-run", "--report", str(report_path))
    assert ret == 0
    content = json.loads(report_path.read_text(encoding="utf-8"))
    assert content["meta"]["total_decisions"] == 6


def test_main_reads_workspace_config(workspace: Path) -> None:
    """Verify that the workspace's YAML config changes the binaries dir."""
    (workspace / ".workspace-bins.yml").write_text(
        "binaries_dir: bin\nuse_symlinks: false\n", encoding="utf-8"
    )
    assert _run("--root", str(workspace)) == 0
    assert (workspace / "lib" / "bin" / "jest").is_file()
    assert not (workspace / "lib" / "bin" / "jest").is_symlink()


def test_main_missing_root_descriptor(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify exit code 1 and a stderr message when the root is not a package."""
    write_json(tmp_path / "child" / "package.json", {"name": "child"})
    assert _run("--root", str(tmp_path)) == 1
    assert "package.json" in capsys.readouterr().err


def test_main_missing_root_directory(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that an unreadable root exits with 1."""
    assert _run("--root", str(tmp_path / "nope")) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_main_link_error_exits_one(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that a refused symlink aborts the run with exit code 1."""
    with patch(
        "workspace_bins.fs_gateway.os.symlink",
        side_effect=PermissionError(1, "Operation not permitted"),
    ):
        assert _run("--root", str(workspace), "--use-link") == 1
    assert "Cannot link" in capsys.readouterr().err


def test_run_linking_collision_is_deterministic(
    tmp_path: Path, make_config: Callable[..., LinkerConfig]
) -> None:
    """Verify that the later of two same-named binaries wins on every run."""
    write_json(
        tmp_path / "package.json",
        {"dependencies": {"first": "1", "second": "1"}},
    )
    for name in ("first", "second"):
        write_json(
            tmp_path / "node_modules" / name / "package.json",
            {"name": name, "bin": {"tool": f"{name}.js"}},
        )
    write_json(tmp_path / "app" / "package.json", {"name": "app"})

    config = make_config(tmp_path, use_symlinks=False, concurrency=4)
    for _ in range(3):
        report = run_linking(config, RunReport("h"))
        script = (tmp_path / "app" / "node_modules" / ".bin" / "tool").read_text()
        assert "node_modules/second/second.js" in script
        assert "first.js" not in script
    assert len(report.outcomes) == 1
    assert report.summary_lines()[-1] == "app: linked 1, skipped 0, shadowed 1"


def test_run_linking_missing_dependency_does_not_abort(
    workspace: Path, make_config: Callable[..., LinkerConfig]
) -> None:
    """Verify that an uninstalled dependency is simply absent from the run."""
    report = run_linking(make_config(workspace), RunReport("h"))
    assert "ghost" not in report.packages_with_binaries()
    assert len(report.decisions) == 2 * 3


def test_main_unknown_option_exits_one(capsys: pytest.CaptureFixture[str]) -> None:
    """Verify that usage errors use the same exit code as other failures."""
    with pytest.raises(SystemExit) as excinfo:
        _run("--no-such-flag")
    assert excinfo.value.code == 1
    assert "unrecognized arguments" in capsys.readouterr().err


def test_main_rejects_quoted_config_boolean(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that an unrecognised config boolean fails instead of guessing."""
    (workspace / ".workspace-bins.yml").write_text(
        'use_symlinks: "sometimes"\n', encoding="utf-8"
    )
    assert _run("--root", str(workspace)) == 1
    assert "use_symlinks" in capsys.readouterr().err
    assert not (workspace / "lib" / "node_modules").exists()


def test_run_linking_keeps_bin_names_inside_binaries_dir(
    tmp_path: Path, make_config: Callable[..., LinkerConfig]
) -> None:
    """Verify that a path-like bin name is reduced to its last segment."""
    write_json(tmp_path / "package.json", {"dependencies": {"sneaky": "1"}})
    write_json(
        tmp_path / "node_modules" / "sneaky" / "package.json",
        {"name": "sneaky", "bin": {"../../escape": "cli.js"}},
    )
    write_json(tmp_path / "app" / "package.json", {"name": "app"})

    run_linking(make_config(tmp_path, use_symlinks=False), RunReport("h"))

    assert (tmp_path / "app" / "node_modules" / ".bin" / "escape").is_file()
    assert not (tmp_path / "app" / "escape").exists()
