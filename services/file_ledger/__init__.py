"""
File Ledger Service for Commit Ledger.

This service is responsible for:
- Walking non-merge Git history newest first
- Classifying each commit's tree diff per file
- Recording authors, commit hashes and the creating author per file
- Saving and loading ledger results
"""

__version__ = "1.0.0"
__author__ = "Commit Ledger Team"
__description__ = "Per-file Git authorship ledger"
