# -*- coding: utf-8 -*-
"""Vendor and ranking result records."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

UNANSWERED = -1


@dataclass
class Alternative:
    """A vendor candidate and its yes/no answers, one per criterion."""
    identifier: str
    name: str
    responses: List[int] = field(default_factory=list)
    color: str = ""

    def copy(self) -> 'Alternative':
        return Alternative(self.identifier, self.name, list(self.responses), self.color)


@dataclass
class RankingResult:
    """One vendor's position in a finished ranking."""
    name: str
    closeness: float
    percentage: float
    rank: int
    original_values: List[int]
    color: str = ""
    identifier: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'identifier': self.identifier,
            'name': self.name,
            'rank': self.rank,
            'closeness': self.closeness,
            'percentage': self.percentage,
            'original_values': list(self.original_values),
            'color': self.color,
        }
