from __future__ import annotations

from argparse import Namespace
from pathlib import Path

import pytest

from git_integration_tool.cli.config import load_config


def _args(repo_path: str | None = None) -> Namespace:
    return Namespace(repo_path=repo_path)


def test_defaults(tmp_path: Path) -> None:
    config = load_config(_args(str(tmp_path)), env={})

    assert config.repo_path == tmp_path
    assert config.policy.trunk_branch == "master"
    assert config.policy.integration_branch == "integrate"
    assert config.policy.remote == "origin"
    assert config.git_executable == "git"
    assert config.git_timeout_seconds is None
    assert config.check_commands == {}


def test_cli_argument_wins_over_environment(tmp_path: Path) -> None:
    other = tmp_path / "other"
    other.mkdir()

    config = load_config(_args(str(tmp_path)), env={"GIT_REPO_PATH": str(other)})

    assert config.repo_path == tmp_path


def test_environment_overrides(tmp_path: Path) -> None:
    env = {
        "GIT_REPO_PATH": str(tmp_path),
        "GIT_TRUNK_BRANCH": "main",
        "GIT_INTEGRATION_BRANCH": " staging ",
        "GIT_REMOTE": "upstream",
        "GIT_TIMEOUT_SECONDS": "60",
        "INTEGRATION_CHECKS": "lint, test",
        "LINT_COMMAND": "ruff check .",
        "TEST_COMMAND": "pytest -q",
    }

    config = load_config(_args(), env=env)

    assert config.policy.trunk_branch == "main"
    assert config.policy.integration_branch == "staging"
    assert config.policy.remote == "upstream"
    assert config.git_timeout_seconds == 60.0
    assert config.check_commands == {"lint": "ruff check .", "test": "pytest -q"}


@pytest.mark.parametrize(
    ("env", "message"),
    [
        ({"GIT_TRUNK_BRANCH": "main", "GIT_INTEGRATION_BRANCH": "main"}, "must differ"),
        ({"GIT_TIMEOUT_SECONDS": "soon"}, "must be a number"),
        ({"GIT_TIMEOUT_SECONDS": "0"}, "greater than 0"),
        ({"INTEGRATION_CHECKS": "deploy"}, "Unknown check"),
        ({"INTEGRATION_CHECKS": "lint"}, "LINT_COMMAND is not set"),
    ],
)
def test_invalid_configuration(tmp_path: Path, env: dict[str, str], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        load_config(_args(str(tmp_path)), env=env)


def test_missing_repository_path(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        load_config(_args(str(tmp_path / "missing")), env={})
