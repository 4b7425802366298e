"""Subprocess execution for hooks and git."""

from projj.process.runner import ScriptRunner

__all__ = ["ScriptRunner"]
