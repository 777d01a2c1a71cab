"""Pawprint commands."""

from pawprint.commands.compile import CompileCommand, CompileOptions, RunState

__all__ = ["CompileCommand", "CompileOptions", "RunState"]
