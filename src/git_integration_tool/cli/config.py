from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from git_integration_tool.domain.entities import BranchPolicy


SUPPORTED_CHECKS = {"lint": "LINT_COMMAND", "test": "TEST_COMMAND"}


@dataclass(slots=True)
class AppConfig:
    repo_path: Path
    policy: BranchPolicy
    git_executable: str
    git_timeout_seconds: float | None
    check_commands: dict[str, str]
    check_timeout_seconds: float | None


def load_config(args, env: Mapping[str, str]) -> AppConfig:
    repo_path_raw = _normalize_empty(getattr(args, "repo_path", None)) or _normalize_empty(env.get("GIT_REPO_PATH")) or "."
    trunk_branch = _normalize_empty(env.get("GIT_TRUNK_BRANCH")) or "master"
    integration_branch = _normalize_empty(env.get("GIT_INTEGRATION_BRANCH")) or "integrate"
    remote = _normalize_empty(env.get("GIT_REMOTE")) or "origin"
    git_executable = _normalize_empty(env.get("GIT_EXECUTABLE")) or "git"

    if trunk_branch == integration_branch:
        raise ValueError("GIT_TRUNK_BRANCH and GIT_INTEGRATION_BRANCH must differ")

    repo_path = Path(repo_path_raw).expanduser()
    if not repo_path.is_dir():
        raise ValueError(f"Repository path does not exist or is not a directory: {repo_path}")

    git_timeout_seconds = _parse_timeout(env.get("GIT_TIMEOUT_SECONDS"), "GIT_TIMEOUT_SECONDS")
    check_timeout_seconds = _parse_timeout(env.get("CHECK_TIMEOUT_SECONDS"), "CHECK_TIMEOUT_SECONDS")

    raw_checks = _normalize_empty(env.get("INTEGRATION_CHECKS")) or ""
    check_names = [item.strip().lower() for item in raw_checks.split(",") if item.strip()]
    check_commands: dict[str, str] = {}
    for check_name in check_names:
        if check_name not in SUPPORTED_CHECKS:
            valid = ", ".join(sorted(SUPPORTED_CHECKS))
            raise ValueError(f"Unknown check in INTEGRATION_CHECKS: '{check_name}'. Allowed values: {valid}")
        variable = SUPPORTED_CHECKS[check_name]
        command = _normalize_empty(env.get(variable))
        if not command:
            raise ValueError(f"Check '{check_name}' is enabled but {variable} is not set")
        check_commands[check_name] = command

    return AppConfig(
        repo_path=repo_path,
        policy=BranchPolicy(
            trunk_branch=trunk_branch,
            integration_branch=integration_branch,
            remote=remote,
        ),
        git_executable=git_executable,
        git_timeout_seconds=git_timeout_seconds,
        check_commands=check_commands,
        check_timeout_seconds=check_timeout_seconds,
    )


def _parse_timeout(value: str | None, name: str) -> float | None:
    raw = _normalize_empty(value)
    if raw is None:
        return None
    try:
        parsed = float(raw)
    except ValueError as error:
        raise ValueError(f"{name} must be a number") from error
    if parsed <= 0:
        raise ValueError(f"{name} must be greater than 0")
    return parsed


def _normalize_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None
