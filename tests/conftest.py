"""Pytest configuration and fixtures."""

import subprocess
from pathlib import Path

import pytest

from fakes import RecordingSink
from projj.config.settings import Settings
from projj.core.models.config import ProjjConfig
from projj.process.runner import ScriptRunner
from projj.repositories.index import RepositoryIndex


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary config directory and base."""
    return Settings(
        home=str(tmp_path / ".projj"),
        default_base=str(tmp_path / "projj"),
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def runner(sink: RecordingSink) -> ScriptRunner:
    return ScriptRunner(sink=sink)


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def config(base_dir: Path) -> ProjjConfig:
    return ProjjConfig(base=str(base_dir), alias={}, hooks={})


@pytest.fixture
async def index(settings: Settings) -> RepositoryIndex:
    """An empty, loaded repository index."""
    repo_index = RepositoryIndex(settings.cache_path)
    await repo_index.get()
    return repo_index


@pytest.fixture
def git_remote(tmp_path: Path) -> Path:
    """Create a temporary Git repository to clone from."""
    repo_path = tmp_path / "remote" / "repo"
    repo_path.mkdir(parents=True)

    subprocess.run(["git", "init"], cwd=repo_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=repo_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=repo_path, capture_output=True, check=True,
    )

    (repo_path / "README.md").write_text("# Test Repo\n\nA test repository.\n")
    subprocess.run(["git", "add", "."], cwd=repo_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"],
        cwd=repo_path, capture_output=True, check=True,
    )

    return repo_path
