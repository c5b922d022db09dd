"""
Commit Walker.

Yields the linear, non-merge commit history of a repository newest first,
together with the tree each commit should be diffed against.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from git import Repo, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.exc import BadName, BadObject
from git.objects import Commit, Tree
from git.util import hex_to_bin

from shared.exceptions import RepositoryAccessError

# Well-known id of the tree with no entries
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

READ_ERRORS = (GitCommandError, BadName, BadObject, ValueError)


@dataclass
class WalkStep:
    """A commit paired with its diff base."""
    commit: Commit
    base_tree: Tree

    @property
    def is_root(self) -> bool:
        return not self.commit.parents


class CommitWalker:
    """Walk non-merge commits in committer-time-descending order."""

    def __init__(self, repo: Repo, depth: int = 0, logger: Optional[logging.Logger] = None):
        self.repo = repo
        self.depth = depth
        self.logger = logger or logging.getLogger(__name__)
        self.visited = 0

    @classmethod
    def open(
        cls,
        repo_path: Union[str, Path],
        depth: int = 0,
        logger: Optional[logging.Logger] = None
    ) -> "CommitWalker":
        """Open the repository at repo_path."""
        try:
            repo = Repo(str(repo_path))
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryAccessError(f"Not a valid Git repository: {repo_path}") from e
        return cls(repo, depth=depth, logger=logger)

    def head_commit(self) -> Commit:
        try:
            return self.repo.head.commit
        except READ_ERRORS as e:
            raise RepositoryAccessError("Cannot resolve HEAD (empty repository?)") from e

    def empty_tree(self) -> Tree:
        return Tree(self.repo, hex_to_bin(EMPTY_TREE_SHA))

    def diff_base(self, commit: Commit) -> Tree:
        """Tree of the first parent, or the empty tree for a root commit."""
        try:
            if commit.parents:
                return commit.parents[0].tree
        except READ_ERRORS as e:
            raise RepositoryAccessError(f"Cannot read parent of commit {commit.hexsha}: {e}") from e
        return self.empty_tree()

    def walk(self, start: Optional[Union[Commit, str]] = None) -> Iterator[WalkStep]:
        """
        Yield a WalkStep for each non-merge commit reachable from start.

        Merge commits are skipped and not counted. With a positive depth the
        walk stops once more than depth commits have been counted.
        """
        if start is None:
            start = self.head_commit()

        self.visited = 0
        count = 0
        try:
            for commit in self.repo.iter_commits(start, date_order=True):
                if len(commit.parents) > 1:
                    self.logger.debug(f"Ignoring merge commit {commit.hexsha}")
                    continue

                count += 1
                if self.depth > 0 and count > self.depth:
                    self.logger.debug(f"Over depth count={count}, depth={self.depth}")
                    break

                self.visited = count
                self.logger.debug(
                    f"commit={count} hash:{commit.hexsha} author:{commit.author.name}"
                )
                yield WalkStep(commit=commit, base_tree=self.diff_base(commit))
        except READ_ERRORS as e:
            raise RepositoryAccessError(f"Failed to read commit history: {e}") from e

        self.logger.info(f"Walked {self.visited} commits")
