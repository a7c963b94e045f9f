# -*- coding: utf-8 -*-
"""Exception hierarchy for the vendor ranking tool."""

from typing import Optional


class TOPSISError(Exception):
    """Base class for all ranking errors."""


class ValidationError(TOPSISError, ValueError):
    """Input rejected before any matrix computation starts."""


class CriteriaError(ValidationError):
    """The criteria list is empty or carries an invalid weight."""


class IncompleteResponseError(ValidationError):
    """A vendor still has an unanswered criterion."""

    def __init__(self,
                 alternative_name: str,
                 alternative_id: Optional[str] = None,
                 criterion_index: Optional[int] = None):
        self.alternative_name = alternative_name
        self.alternative_id = alternative_id
        self.criterion_index = criterion_index
        super().__init__(f"Please answer all questions for {alternative_name}")


class MinimumAlternativeError(TOPSISError):
    """Removing the vendor would leave the session empty."""

    def __init__(self, minimum: int = 1):
        self.minimum = minimum
        noun = "vendor" if minimum == 1 else "vendors"
        super().__init__(f"You need at least {minimum} {noun}")


class UnknownAlternativeError(TOPSISError, KeyError):
    """No vendor with the given identifier exists in the session."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self) -> str:
        return f"Unknown vendor: {self.identifier}"


class RankingInProgressError(TOPSISError):
    """A ranking run is already executing on this session."""
