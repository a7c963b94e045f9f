# -*- coding: utf-8 -*-
"""
Ranking session: the vendors being compared and their answers.

A session owns its vendors. Rankings run on a snapshot, so edits made
after ``run()`` returns never alter the stored results.
"""

import itertools
import threading
from typing import List, Optional, Sequence

import pandas as pd

from .config import AnalysisStep, Config, get_config
from .criteria import Criterion, DEFAULT_CRITERIA, criterion_labels, validate_criteria
from .exceptions import (
    MinimumAlternativeError, RankingInProgressError,
    UnknownAlternativeError, ValidationError,
)
from .logger import get_module_logger
from .mcdm.topsis import TOPSISCalculator, TOPSISResult
from .models import Alternative, RankingResult


class RankingSession:
    """
    Mutable set of vendors answering a fixed list of criteria.

    Parameters
    ----------
    criteria : sequence of Criterion, optional
        Criteria for the whole session (defaults to the eight vendor
        questions).
    config : Config, optional
        Global configuration (defaults to ``get_config()``).
    populate : bool, optional
        Start with one blank vendor; defaults to
        ``config.session.start_with_alternative``.
    """

    def __init__(self,
                 criteria: Optional[Sequence[Criterion]] = None,
                 config: Optional[Config] = None,
                 populate: Optional[bool] = None):
        self.config = config or get_config()
        self.criteria = tuple(validate_criteria(
            DEFAULT_CRITERIA if criteria is None else criteria
        ))
        self.alternatives: List[Alternative] = []
        self.results: List[RankingResult] = []
        self.last_result: Optional[TOPSISResult] = None
        self.current_step = AnalysisStep.SETUP

        self._ids = itertools.count(1)
        self._run_lock = threading.Lock()
        self.logger = get_module_logger('session')

        if populate is None:
            populate = self.config.session.start_with_alternative
        if populate:
            self.add_alternative()

    @property
    def n_criteria(self) -> int:
        return len(self.criteria)

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    # -----------------------------------------------------------------
    # Vendor management
    # -----------------------------------------------------------------

    def add_alternative(self, name: Optional[str] = None) -> Alternative:
        """Append a vendor with every criterion unanswered."""
        settings = self.config.session
        position = len(self.alternatives)
        alt = Alternative(
            identifier=f"vendor_{next(self._ids)}",
            name=name if name is not None else settings.name_template.format(n=position + 1),
            responses=[self.config.topsis.unanswered] * self.n_criteria,
            color=settings.palette[position % len(settings.palette)] if settings.palette else "",
        )
        self.alternatives.append(alt)
        self.logger.debug(f"Added {alt.name} ({alt.identifier}), "
                          f"completion {self.completion_percentage():.0f}%")
        return alt

    def remove_alternative(self, identifier: str) -> None:
        """
        Remove a vendor.

        Raises
        ------
        MinimumAlternativeError
            If only the minimum number of vendors remains.
        UnknownAlternativeError
            If no vendor has this identifier.
        """
        alt = self.get_alternative(identifier)
        minimum = self.config.session.min_alternatives
        if len(self.alternatives) <= minimum:
            self.logger.warning(f"Refused to remove {alt.name}: at least {minimum} vendor(s) required")
            raise MinimumAlternativeError(minimum)
        self.alternatives.remove(alt)
        self.logger.debug(f"Removed {alt.name} ({alt.identifier})")

    def rename_alternative(self, identifier: str, name: str) -> None:
        self.get_alternative(identifier).name = name

    def set_response(self, identifier: str, criterion_index: int, value: int) -> None:
        """
        Record the yes (1) / no (0) answer of a vendor to one criterion.

        Raises
        ------
        ValidationError
            If the index is outside the criteria list or the value is not 0/1.
        """
        alt = self.get_alternative(identifier)
        if not 0 <= criterion_index < self.n_criteria:
            raise ValidationError(
                f"Criterion index {criterion_index} out of range for {self.n_criteria} criteria"
            )
        if value not in (0, 1):
            raise ValidationError(f"Answer must be 0 or 1, got {value!r}")
        alt.responses[criterion_index] = int(value)

    def get_alternative(self, identifier: str) -> Alternative:
        for alt in self.alternatives:
            if alt.identifier == identifier:
                return alt
        raise UnknownAlternativeError(identifier)

    # -----------------------------------------------------------------
    # Progress
    # -----------------------------------------------------------------

    def completion_percentage(self) -> float:
        """Share of answered cells across all vendors, 0-100."""
        total = len(self.alternatives) * self.n_criteria
        if total == 0:
            return 0.0
        unanswered = self.config.topsis.unanswered
        answered = sum(
            1 for alt in self.alternatives for r in alt.responses if r != unanswered
        )
        return answered / total * 100

    def is_complete(self) -> bool:
        return bool(self.alternatives) and self.completion_percentage() == 100

    def can_run(self) -> bool:
        """Run gate: every answer given and no ranking in flight."""
        return self.is_complete() and not self.is_running

    # -----------------------------------------------------------------
    # Ranking
    # -----------------------------------------------------------------

    def run(self) -> TOPSISResult:
        """
        Rank a snapshot of the current vendors.

        Raises
        ------
        RankingInProgressError
            If another run on this session has not finished.
        IncompleteResponseError
            If a vendor has an unanswered criterion.
        """
        if not self._run_lock.acquire(blocking=False):
            raise RankingInProgressError("A ranking is already running for this session")
        try:
            snapshot = [alt.copy() for alt in self.alternatives]
            self.current_step = AnalysisStep.ANALYSIS
            try:
                result = TOPSISCalculator(self.config.topsis).calculate(snapshot, self.criteria)
            except ValidationError as e:
                self.current_step = AnalysisStep.SETUP
                self.logger.warning(f"Ranking not started: {e}")
                raise
            except Exception:
                self.current_step = AnalysisStep.SETUP
                raise

            self.last_result = result
            self.results = result.results
            self.current_step = AnalysisStep.RESULTS
            self.logger.info(f"Ranked {len(snapshot)} vendor(s); "
                             f"top: {result.winner.name} ({result.winner.closeness:.4f})")
            return result
        finally:
            self._run_lock.release()

    def reset(self) -> None:
        """Drop every vendor and result and start over with one blank vendor."""
        self.alternatives = []
        self.results = []
        self.last_result = None
        self.current_step = AnalysisStep.SETUP
        self.add_alternative()
        self.logger.info("Session reset")

    def responses_frame(self) -> pd.DataFrame:
        """Answers table with a ``Vendor`` name column and ``Q1..Qn``."""
        labels = criterion_labels(self.criteria)
        df = pd.DataFrame([alt.responses for alt in self.alternatives],
                          columns=labels, dtype=int)
        df.insert(0, 'Vendor', [alt.name for alt in self.alternatives])
        return df
