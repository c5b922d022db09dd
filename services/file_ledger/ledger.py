"""
Ledger Builder.

Turns each commit's tree diff into updates of a path -> CommitFile ledger.
"""

import logging
import re
from typing import Dict, Iterable, Iterator, List, Optional

from git import GitCommandError
from git.diff import Diff
from git.objects import Commit, Tree

from shared.exceptions import DiffComputationError
from shared.models import CommitFile, DiffAction, FileChange, ParseResult


def parse_extensions(raw: Optional[str]) -> List[str]:
    """Split a comma-separated extension list. An empty string allows everything."""
    if not raw:
        return []
    extensions = []
    for item in raw.split(","):
        item = item.strip().lstrip(".")
        if item:
            extensions.append(item)
    return extensions


def match_extension(extensions: List[str], path: str) -> bool:
    """Case-sensitive test of the path's final extension against the allow-list."""
    if not extensions:
        return True
    pattern = r"^.*\.(" + "|".join(re.escape(ext) for ext in extensions) + r")$"
    return re.match(pattern, path, re.DOTALL) is not None


def canonical_path(diff: Diff) -> str:
    """Old path when the entry has a from side, new path for insertions."""
    if diff.new_file or not diff.a_path:
        return diff.b_path
    return diff.a_path


def classify(diff: Diff) -> DiffAction:
    if diff.new_file:
        return DiffAction.INSERT
    if diff.deleted_file:
        return DiffAction.DELETE
    return DiffAction.MODIFY


class FileLedger:
    """Insertion-ordered mapping from path to its authorship record."""

    def __init__(self):
        self._files: Dict[str, CommitFile] = {}

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: str) -> bool:
        return path in self._files

    def get(self, path: str) -> Optional[CommitFile]:
        return self._files.get(path)

    def record(self, path: str, author: str, hexsha: str, created: bool = False) -> CommitFile:
        """
        Fold one change event into the ledger.

        A new path gets a fresh record. For a known path the author is added
        if unseen, the hash is always appended, and an insertion event
        overwrites create_by, so the last processed insertion wins.
        """
        create_by = author if created else ""
        entry = self._files.get(path)
        if entry is None:
            entry = CommitFile(
                path=path,
                authors=[author],
                commit_hash=[hexsha],
                create_by=create_by,
            )
            self._files[path] = entry
            return entry

        entry.add_author(author)
        entry.commit_hash.append(hexsha)
        if create_by:
            entry.create_by = create_by
        return entry

    def result(self) -> ParseResult:
        return ParseResult([f.model_copy(deep=True) for f in self._files.values()])


class LedgerBuilder:
    """Build a FileLedger from (commit, base tree) pairs."""

    def __init__(
        self,
        extensions: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.extensions = list(extensions or [])
        self.logger = logger or logging.getLogger(__name__)
        self.ledger = FileLedger()

    def changes(self, commit: Commit, base_tree: Tree) -> Iterator[FileChange]:
        """Classified, extension-filtered changes between base_tree and the commit's tree."""
        try:
            diff_index = base_tree.diff(commit.tree)
        except GitCommandError as e:
            raise DiffComputationError(f"Failed to diff commit {commit.hexsha}: {e}") from e

        for diff in diff_index:
            path = canonical_path(diff)
            if not match_extension(self.extensions, path):
                continue
            yield FileChange(path=path, action=classify(diff))

    def apply(self, commit: Commit, base_tree: Tree) -> int:
        """Apply one commit to the ledger. Returns the number of changes recorded."""
        author = commit.author.name
        hexsha = commit.hexsha
        applied = 0
        for change in self.changes(commit, base_tree):
            if change.path in self.ledger:
                self.logger.debug(f"exist {change.path}")
            else:
                self.logger.debug(f"new file {change.path}")
            self.ledger.record(change.path, author, hexsha, created=change.is_insert)
            applied += 1
        return applied

    def build(self, steps: Iterable) -> ParseResult:
        """Apply every WalkStep and return the finished result."""
        for step in steps:
            self.apply(step.commit, step.base_tree)
        self.logger.info(f"Ledger contains {len(self.ledger)} files")
        return self.ledger.result()
