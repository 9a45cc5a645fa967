from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from git_integration_tool.adapters.git_client.shell_git_client import ShellGitClientAdapter
from git_integration_tool.application.services.integration_policy import normalize_message
from git_integration_tool.application.use_cases.branch_workflows import BranchIntegrationWorkflow
from git_integration_tool.checks import RunCommandCheckAction, ShellCommandRunner
from git_integration_tool.cli.config import AppConfig, load_config
from git_integration_tool.domain.actions import ActionPipeline
from git_integration_tool.domain.entities import WorkflowSummary
from git_integration_tool.domain.errors import WorkflowError
from git_integration_tool.logging_utils import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-integrate",
        description="Commit, amend and integrate work following a trunk/integration branch policy.",
    )
    parser.add_argument(
        "--repo-path",
        required=False,
        help="Working repository directory. Falls back to GIT_REPO_PATH, then the current directory.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    commit_parser = subparsers.add_parser(
        "commit",
        help="Stage all changes, commit on trunk and publish.",
    )
    commit_parser.add_argument(
        "-m",
        "--message",
        required=True,
        help="Commit message. Messages containing 'initial' may be committed from any branch.",
    )

    amend_parser = subparsers.add_parser(
        "amend",
        help="Stage all changes into the last trunk commit and publish.",
    )
    amend_parser.add_argument(
        "--force-with-lease",
        action="store_true",
        help="Publish with --force-with-lease, needed when the amended commit was already pushed.",
    )

    integrate_parser = subparsers.add_parser(
        "integrate",
        help="Merge trunk into the integration branch (or trunk when -m is given), publish and return to trunk.",
    )
    integrate_parser.add_argument(
        "-m",
        "--message",
        nargs="?",
        const=None,
        default=None,
        help="Presence of a message targets trunk instead of the integration branch.",
    )
    integrate_parser.add_argument(
        "--skip-checks",
        action="store_true",
        help="Do not run the pre-integration checks from INTEGRATION_CHECKS.",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    try:
        configure_logging(os.environ.get("LOG_LEVEL", "INFO"), os.environ.get("LOG_FORMAT", "json"))
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2
    logger = logging.getLogger(__name__)

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args=args, env=os.environ)
    except ValueError as error:
        parser.error(str(error))

    logger.info(
        "cli configuration resolved",
        extra={
            "event": "cli.config.resolved",
            "command": args.command,
            "repo_path": str(config.repo_path),
            "trunk_branch": config.policy.trunk_branch,
            "integration_branch": config.policy.integration_branch,
            "remote": config.policy.remote,
            "checks": list(config.check_commands),
        },
    )

    if args.command == "commit" and normalize_message(args.message) is None:
        parser.error("commit requires a non-empty message (-m/--message)")

    workflow = _build_workflow(config)
    try:
        if args.command == "commit":
            summary = workflow.commit(args.message)
        elif args.command == "amend":
            summary = workflow.amend(force_with_lease=args.force_with_lease)
        else:
            summary = workflow.integrate(args.message, run_checks=not args.skip_checks)
    except WorkflowError as error:
        logger.exception(
            "workflow failed",
            extra={"event": "cli.execution.failed", "command": args.command, "error_type": type(error).__name__},
        )
        print(f"error: {error}", file=sys.stderr)
        return 1

    _print_summary(summary)
    return 0


def _build_workflow(config: AppConfig) -> BranchIntegrationWorkflow:
    vcs = ShellGitClientAdapter(
        config.repo_path,
        git_executable=config.git_executable,
        timeout_seconds=config.git_timeout_seconds,
    )
    return BranchIntegrationWorkflow(
        vcs=vcs,
        policy=config.policy,
        repo_path=config.repo_path,
        checks=_build_check_pipeline(config),
    )


def _build_check_pipeline(config: AppConfig) -> ActionPipeline:
    if not config.check_commands:
        return ActionPipeline([])

    runner = ShellCommandRunner(timeout_seconds=config.check_timeout_seconds)
    return ActionPipeline(
        [RunCommandCheckAction(name, command, runner) for name, command in config.check_commands.items()]
    )


def _print_summary(summary: WorkflowSummary) -> None:
    print(f"[{summary.command.upper()}] completed")
    if summary.destination_branch:
        print(f"Destination branch: {summary.destination_branch}")
    for result in summary.check_results:
        status = "ok" if result.success else "failed"
        print(f"- check {result.action_name}: {result.message} [{status}]")
    for step in summary.steps:
        print(f"- {step}")
    print(f"Published branch: {summary.published_branch}")
    print(f"Current branch: {summary.final_branch}")


if __name__ == "__main__":
    raise SystemExit(main())
