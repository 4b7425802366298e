"""User-defined lifecycle hooks."""

from projj.hooks.invoker import HookInvoker

__all__ = ["HookInvoker"]
