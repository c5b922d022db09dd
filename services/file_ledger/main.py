"""
File Ledger Service for Commit Ledger.

This service ties the pieces together:
- Opening the repository and resolving HEAD
- Walking non-merge history with the configured depth
- Building the per-file authorship ledger
- Saving the result to disk and reading saved results back
"""

import logging
from pathlib import Path
from typing import Optional, Union

from config.settings import Settings, get_settings
from shared.exceptions import ResultFileError
from shared.models import ParseResult
from shared.storage import ResultStore
from services.file_ledger.ledger import LedgerBuilder, parse_extensions
from services.file_ledger.walker import CommitWalker


class FileLedgerService:
    """Core file ledger service."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.settings = settings or get_settings()
        self.logger = logger or logging.getLogger(__name__)
        self.store = ResultStore(logger=self.logger)

    def parse(
        self,
        repo_path: Optional[Union[str, Path]] = None,
        output_file: Optional[Union[str, Path]] = None,
        depth: Optional[int] = None,
        extensions: Optional[str] = None
    ) -> ParseResult:
        """
        Walk the repository history from HEAD and build the file ledger.

        Arguments left as None fall back to the configured ledger settings.
        The result is written to output_file when one is set.

        Raises:
            RepositoryAccessError: the repository or one of its objects cannot be read
            DiffComputationError: a tree diff fails
            ResultFileError: the result cannot be written
        """
        ledger_settings = self.settings.ledger
        repo_path = repo_path if repo_path is not None else ledger_settings.repo_path
        output_file = output_file if output_file is not None else ledger_settings.output_file
        depth = depth if depth is not None else ledger_settings.depth
        extension_list = (
            parse_extensions(extensions) if extensions is not None
            else ledger_settings.extension_list()
        )

        self.logger.debug(
            f"Parsing {repo_path} (depth={depth}, extensions={extension_list or 'all'})"
        )

        walker = CommitWalker.open(repo_path, depth=depth, logger=self.logger)
        head = walker.head_commit()
        builder = LedgerBuilder(extension_list, logger=self.logger)
        result = builder.build(walker.walk(head))

        if output_file:
            self.store.save(result, output_file)

        self.logger.info(
            f"Parsed {walker.visited} commits into {len(result)} files from {repo_path}"
        )
        return result

    def open_result(self, path: Optional[Union[str, Path]] = None) -> ParseResult:
        """Read a previously saved result without walking history again."""
        path = path if path is not None else self.settings.ledger.output_file
        if not path:
            raise ResultFileError("No result file configured")
        return self.store.load(path)
