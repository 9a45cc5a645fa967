from __future__ import annotations

from pathlib import Path

import pytest

from git_integration_tool.application.use_cases.branch_workflows import BranchIntegrationWorkflow
from git_integration_tool.cli import main as cli_main
from git_integration_tool.domain.entities import BranchPolicy


@pytest.fixture
def wired_fake(fake_git, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("LOG_FORMAT", "text")
    monkeypatch.delenv("INTEGRATION_CHECKS", raising=False)
    monkeypatch.setenv("GIT_REPO_PATH", str(tmp_path))

    def build(config):
        return BranchIntegrationWorkflow(vcs=fake_git, policy=BranchPolicy(), repo_path=config.repo_path)

    monkeypatch.setattr(cli_main, "_build_workflow", build)
    return fake_git


def test_commit_prints_summary(wired_fake, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main.main(["commit", "-m", "fix login"]) == 0

    out = capsys.readouterr().out
    assert "[COMMIT] completed" in out
    assert "Published branch: master" in out
    assert wired_fake.pushed == [("origin", "master")]


def test_precondition_failure_exits_non_zero(wired_fake, capsys: pytest.CaptureFixture[str]) -> None:
    wired_fake.branches["feature-x"] = ["root"]
    wired_fake.current = "feature-x"

    assert cli_main.main(["amend"]) == 1

    err = capsys.readouterr().err
    assert "error: Expected current branch to be master, but was feature-x." in err


def test_integrate_with_bare_message_flag_targets_integration_branch(wired_fake) -> None:
    assert cli_main.main(["integrate", "-m"]) == 0

    assert wired_fake.pushed == [("origin", "integrate")]
    assert wired_fake.current == "master"


def test_integrate_with_message_targets_trunk(wired_fake, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main.main(["integrate", "-m", "release 1.0"]) == 0

    assert wired_fake.pushed == [("origin", "master")]
    assert "Destination branch: master" in capsys.readouterr().out


def test_conflict_exits_non_zero(wired_fake) -> None:
    wired_fake.conflict_on_merge = True

    assert cli_main.main(["integrate"]) == 1
    assert wired_fake.current == "integrate"


def test_blank_commit_message_is_a_usage_error(wired_fake) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["commit", "-m", "   "])

    assert excinfo.value.code == 2
    assert wired_fake.calls == []


def test_value_error_inside_workflow_is_not_a_usage_error(
    wired_fake, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_stage_all(path: str = ".") -> None:
        raise ValueError("embedded null byte")

    monkeypatch.setattr(wired_fake, "stage_all", broken_stage_all)

    with pytest.raises(ValueError, match="embedded null byte"):
        cli_main.main(["commit", "-m", "fix login"])


def test_non_executable_git_exits_non_zero(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_git_binary = tmp_path / "git"
    fake_git_binary.write_text("not a program\n", encoding="utf-8")
    fake_git_binary.chmod(0o644)
    monkeypatch.setenv("LOG_FORMAT", "text")
    monkeypatch.setenv("GIT_EXECUTABLE", str(fake_git_binary))
    monkeypatch.delenv("INTEGRATION_CHECKS", raising=False)

    assert cli_main.main(["--repo-path", str(tmp_path), "amend"]) == 1

    assert "could not be run" in capsys.readouterr().err


def test_invalid_configuration_is_a_usage_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GIT_TRUNK_BRANCH", "main")
    monkeypatch.setenv("GIT_INTEGRATION_BRANCH", "main")

    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["--repo-path", str(tmp_path), "amend"])

    assert excinfo.value.code == 2


def test_check_pipeline_is_built_from_config(tmp_path: Path) -> None:
    config = cli_main.load_config(
        args=cli_main.build_parser().parse_args(["--repo-path", str(tmp_path), "integrate"]),
        env={"INTEGRATION_CHECKS": "test,lint", "LINT_COMMAND": "ruff check .", "TEST_COMMAND": "pytest -q"},
    )

    pipeline = cli_main._build_check_pipeline(config)

    assert [action.name for action in pipeline.actions] == ["test", "lint"]
