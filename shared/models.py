"""
Data models for Commit Ledger.

This module provides:
- The per-file authorship record (CommitFile)
- The ordered parse result (ParseResult)
- Diff classification types used while building the ledger
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Iterator

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


class DiffAction(Enum):
    """Classification of a single tree diff entry."""
    INSERT = "insert"
    MODIFY = "modify"
    DELETE = "delete"


@dataclass(frozen=True)
class FileChange:
    """A classified diff entry for one path."""
    path: str
    action: DiffAction

    @property
    def is_insert(self) -> bool:
        return self.action is DiffAction.INSERT


class CommitFile(BaseModel):
    """Authorship record for a single repository path."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., alias="Path", min_length=1, description="Repository-relative path")
    authors: List[str] = Field(default_factory=list, alias="Authors", description="Author names, first-seen order")
    commit_hash: List[str] = Field(default_factory=list, alias="CommitHash", description="Commits touching the path")
    create_by: str = Field(default="", alias="CreateBy", description="Author of the insertion event")

    @field_validator("authors", mode="before")
    @classmethod
    def validate_authors(cls, v):
        """Drop repeated names, keeping first-seen order."""
        if v is None:
            return []
        return list(dict.fromkeys(v))

    @field_validator("commit_hash", mode="before")
    @classmethod
    def validate_commit_hash(cls, v):
        return [] if v is None else v

    @field_validator("create_by", mode="before")
    @classmethod
    def validate_create_by(cls, v):
        return v or ""

    def add_author(self, author: str) -> bool:
        """Append an author unless already present. Returns True if added."""
        if author in self.authors:
            return False
        self.authors.append(author)
        return True


class ParseResult(RootModel[List[CommitFile]]):
    """Ordered sequence of CommitFile records, in order of first discovery."""

    root: List[CommitFile] = Field(default_factory=list)

    def __iter__(self) -> Iterator[CommitFile]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> CommitFile:
        return self.root[index]

    def paths(self) -> List[str]:
        return [f.path for f in self.root]

    def get(self, path: str) -> Optional[CommitFile]:
        """Look up a record by exact path."""
        for f in self.root:
            if f.path == path:
                return f
        return None
