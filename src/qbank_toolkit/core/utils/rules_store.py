"""
Rule snapshot persistence.

JSON-backed store for the ExtractionRules a caller keeps across
reconciliation passes. Any malformed data results in a graceful fallback
to defaults, never an exception: a broken rules file must not block an
import.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from ...analysis.config import AnalysisConfig
from ...analysis.reconciler import reconcile_rules
from ..models.rules import ExtractionRules
from ..models.summary import JsonGuidelineSummary
from .file_locking import locked_read_json, locked_write_json

logger = logging.getLogger(__name__)


class RulesStore:
    """
    Lightweight JSON-backed store for one rule snapshot.

    Example:
        >>> store = RulesStore(Path("rules.json"))
        >>> changed = store.apply_summary(summary)
        >>> store.rules.forward_slash_handling
        True
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.load_error: Optional[str] = None
        self._rules = ExtractionRules()

        try:
            data = locked_read_json(self.path)
        except json.JSONDecodeError as e:
            self.load_error = f"Rules file is corrupted: {e}"
        except OSError as e:
            self.load_error = f"Failed to read rules: {e}"
        else:
            if data is not None:
                self._rules = ExtractionRules.from_dict(data)

        if self.load_error:
            logger.warning(f"{self.load_error} - using default rules")

    @property
    def rules(self) -> ExtractionRules:
        return self._rules

    def save(self) -> None:
        locked_write_json(self.path, self._rules.to_dict())

    def update(self, rules: ExtractionRules) -> None:
        """Replace the snapshot (e.g. after a user edit) and persist it."""
        self._rules = rules
        self.save()

    def apply_summary(
        self,
        summary: JsonGuidelineSummary,
        config: Optional[AnalysisConfig] = None,
    ) -> bool:
        """
        Reconcile the stored rules against a summary.

        The file is written only when the reconciler returns a new snapshot
        and the existing file loaded cleanly; a file that failed to load is
        left untouched and the new snapshot is kept in memory only.

        Returns:
            True if the rules changed

        Raises:
            OSError: If the rules file cannot be written
        """
        reconciled = reconcile_rules(summary, self._rules, config)
        if reconciled is self._rules:
            return False
        if self.load_error:
            logger.warning(f"Not overwriting {self.path}: {self.load_error}")
            self._rules = reconciled
            return True
        self.update(reconciled)
        return True
