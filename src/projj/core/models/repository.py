"""Repository index models."""

from pydantic import BaseModel, ConfigDict


class RepositoryEntry(BaseModel):
    """An entry of the repository index, keyed by canonical path."""

    model_config = ConfigDict(extra="allow")

    repo: str
