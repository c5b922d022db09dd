"""
Result persistence for Commit Ledger.

Results are stored as indented JSON using the field names Path, Authors,
CommitHash and CreateBy.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from shared.exceptions import ResultFileError
from shared.models import ParseResult


class ResultStore:
    """Save and load ParseResult documents."""

    indent = 2

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def dumps(self, result: ParseResult) -> str:
        return result.model_dump_json(by_alias=True, indent=self.indent)

    def loads(self, raw: Union[str, bytes]) -> ParseResult:
        try:
            return ParseResult.model_validate_json(raw)
        except ValidationError as e:
            raise ResultFileError(f"Malformed result document: {e}") from e

    def save(self, result: ParseResult, path: Union[str, Path]) -> Path:
        """Write a result to disk, creating parent directories as needed."""
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.dumps(result), encoding="utf-8")
        except OSError as e:
            raise ResultFileError(f"Cannot write result file {target}: {e}") from e

        self.logger.info(f"Saved {len(result)} files to {target}")
        return target

    def load(self, path: Union[str, Path]) -> ParseResult:
        """Read a previously saved result."""
        source = Path(path)
        try:
            raw = source.read_bytes()
        except OSError as e:
            raise ResultFileError(f"Cannot read result file {source}: {e}") from e

        result = self.loads(raw)
        self.logger.debug(f"Loaded {len(result)} files from {source}")
        return result
