"""Git integration module for projj."""

from projj.git.url_resolver import URLResolver

__all__ = ["URLResolver"]
