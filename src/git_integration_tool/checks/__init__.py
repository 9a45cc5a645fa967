"""Pluggable pre-integration checks."""

from .command_check import RunCommandCheckAction
from .command_runtime import CommandRunner, ShellCommandRunner

__all__ = [
	"CommandRunner",
	"RunCommandCheckAction",
	"ShellCommandRunner",
]
