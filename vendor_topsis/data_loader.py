# -*- coding: utf-8 -*-
"""Loading vendor answer sheets into ranking sessions."""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import Optional, Sequence, Union

from .config import Config, get_config
from .criteria import Criterion, DEFAULT_CRITERIA, criterion_labels
from .exceptions import ValidationError
from .logger import get_logger
from .session import RankingSession

VENDOR_COLUMN = 'Vendor'


class ResponseDataLoader:
    """
    Reads answer sheets: one row per vendor, a ``Vendor`` name column and
    one ``Q1..Qn`` column per criterion holding 0, 1 or a blank cell
    (unanswered).
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        self.logger = get_logger('data_loader')

    def load(self,
             path: Union[str, Path],
             criteria: Optional[Sequence[Criterion]] = None) -> RankingSession:
        """
        Load a CSV answer sheet.

        Parameters
        ----------
        path : str or Path
            CSV file.
        criteria : sequence of Criterion, optional
            Criteria the ``Q`` columns refer to (default vendor questions).

        Returns
        -------
        RankingSession
            Session holding one vendor per row, in file order.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Answer sheet not found: {path}")

        df = pd.read_csv(path, dtype={VENDOR_COLUMN: str})
        session = self.from_frame(df, criteria)
        self.logger.info(f"Loaded {len(session.alternatives)} vendor(s) from {path} "
                         f"({session.completion_percentage():.0f}% answered)")
        return session

    def from_frame(self,
                   df: pd.DataFrame,
                   criteria: Optional[Sequence[Criterion]] = None) -> RankingSession:
        """Build a session from an answers table."""
        criteria = list(DEFAULT_CRITERIA if criteria is None else criteria)
        labels = criterion_labels(criteria)

        missing = [c for c in [VENDOR_COLUMN] + labels if c not in df.columns]
        if missing:
            raise ValidationError(f"Answer sheet is missing columns: {missing}")
        if df.empty:
            raise ValidationError("Answer sheet has no vendors")

        session = RankingSession(criteria, self.config, populate=False)
        for row_no, row in enumerate(df.to_dict(orient='records'), 1):
            name = row[VENDOR_COLUMN]
            alt = session.add_alternative(
                name=None if pd.isna(name) or not str(name).strip() else str(name).strip()
            )
            for j, label in enumerate(labels):
                value = row[label]
                if pd.isna(value):
                    continue
                try:
                    session.set_response(alt.identifier, j, _as_answer(value))
                except ValidationError as e:
                    raise ValidationError(f"Row {row_no}, {label}: {e}") from e
        return session

    def generate_synthetic(self,
                           n_alternatives: int = 5,
                           criteria: Optional[Sequence[Criterion]] = None,
                           seed: int = 42) -> RankingSession:
        """Session of ``n_alternatives`` vendors with random complete answers."""
        if n_alternatives < 1:
            raise ValidationError("At least one vendor is required")
        criteria = list(DEFAULT_CRITERIA if criteria is None else criteria)
        rng = np.random.RandomState(seed)
        answers = rng.randint(0, 2, size=(n_alternatives, len(criteria)))

        session = RankingSession(criteria, self.config, populate=False)
        for row in answers:
            alt = session.add_alternative()
            for j, value in enumerate(row):
                session.set_response(alt.identifier, j, int(value))
        return session

    @staticmethod
    def save(session: RankingSession, path: Union[str, Path]) -> str:
        """Write a session's answers; unanswered cells are left blank."""
        df = session.responses_frame()
        labels = criterion_labels(session.criteria)
        df[labels] = df[labels].where(df[labels] != session.config.topsis.unanswered)
        df.to_csv(path, index=False, float_format='%.0f')
        return str(path)


def _as_answer(value) -> int:
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"answer must be 0 or 1, got {value!r}")
    if number not in (0.0, 1.0):
        raise ValidationError(f"answer must be 0 or 1, got {value!r}")
    return int(number)


def load_responses(path: Union[str, Path],
                   criteria: Optional[Sequence[Criterion]] = None,
                   config: Optional[Config] = None) -> RankingSession:
    """Convenience function for ``ResponseDataLoader().load``."""
    return ResponseDataLoader(config).load(path, criteria)
