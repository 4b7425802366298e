"""projj: a workspace of cloned repositories under one base directory."""

__version__ = "0.1.0"
