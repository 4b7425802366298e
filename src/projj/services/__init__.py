"""Business logic services for projj."""

from projj.services.workspace import WorkspaceService

__all__ = ["WorkspaceService"]
