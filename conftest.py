"""
Shared pytest fixtures for Commit Ledger.

Provides a small builder for throwaway Git repositories with controlled
authors and commit dates.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest
from git import Actor, Repo
from git.objects import Commit

from config.settings import get_settings


class RepoBuilder:
    """Create commits in a fresh repository, one minute apart."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path)
        self._clock = 1_600_000_000

    def commit(
        self,
        author: str,
        write: Optional[Dict[str, str]] = None,
        remove: Iterable[str] = (),
        parents: Optional[List[Commit]] = None,
        head: bool = True,
        message: Optional[str] = None
    ) -> Commit:
        write = write or {}
        for name, content in write.items():
            target = self.path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        if write:
            self.repo.index.add(list(write))
        remove = list(remove)
        if remove:
            self.repo.index.remove(remove, working_tree=True)

        self._clock += 60
        date = f"{self._clock} +0000"
        actor = Actor(author, f"{author.lower()}@example.com")
        return self.repo.index.commit(
            message or f"change by {author}",
            parent_commits=parents,
            head=head,
            author=actor,
            committer=actor,
            author_date=date,
            commit_date=date,
        )


@pytest.fixture
def repo_builder(tmp_path):
    """An empty Git repository with a commit helper."""
    return RepoBuilder(tmp_path / "repo")


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Isolate tests from LEDGER_/MONITORING_ environment and cached settings."""
    for name in ("LEDGER__DEPTH", "LEDGER__EXTENSIONS", "LEDGER__REPO_PATH", "LEDGER__OUTPUT_FILE",
                 "LEDGER_DEPTH", "LEDGER_EXTENSIONS", "LEDGER_REPO_PATH", "LEDGER_OUTPUT_FILE",
                 "MONITORING__LOG_LEVEL", "MONITORING_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
