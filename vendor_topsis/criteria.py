# -*- coding: utf-8 -*-
"""
Evaluation criteria for wedding vendors.

Each criterion is a yes/no question answered per vendor. ``benefit``
criteria reward a "yes" (1); cost criteria reward a "no" (0).
"""

import json
import math
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Sequence, Union

import numpy as np
import pandas as pd

from .exceptions import CriteriaError


@dataclass(frozen=True)
class Criterion:
    """A weighted, polarity-tagged yes/no question."""
    text: str
    weight: float
    benefit: bool = True
    category: str = ""
    tooltip: str = ""

    @property
    def kind(self) -> str:
        return "benefit" if self.benefit else "cost"


DEFAULT_CRITERIA: List[Criterion] = [
    Criterion(
        text="Price within couple's budget?",
        weight=0.2,
        tooltip="Whether the vendor's pricing aligns with the couple's allocated budget",
        benefit=True,
        category="Cost",
    ),
    Criterion(
        text="Available on wedding date?",
        weight=0.15,
        tooltip="Vendor has confirmed availability for the specific wedding date",
        benefit=True,
        category="Availability",
    ),
    Criterion(
        text="Positive reviews (4.5+ stars)?",
        weight=0.1,
        tooltip="Vendor has consistently high ratings from previous clients",
        benefit=True,
        category="Reputation",
    ),
    Criterion(
        text="Experience (5+ years)?",
        weight=0.1,
        tooltip="Vendor has significant experience in the wedding industry",
        benefit=True,
        category="Experience",
    ),
    Criterion(
        text="Offers customization options?",
        weight=0.15,
        tooltip="Ability to tailor services to couple's specific preferences and needs",
        benefit=True,
        category="Flexibility",
    ),
    Criterion(
        text="Requires large deposit (>50%)?",
        weight=0.1,
        tooltip="Vendor requires a substantial upfront payment",
        benefit=False,
        category="Payment Terms",
    ),
    Criterion(
        text="Provides liability insurance?",
        weight=0.1,
        tooltip="Vendor has proper insurance coverage for their services",
        benefit=True,
        category="Security",
    ),
    Criterion(
        text="Located within 30km of venue?",
        weight=0.1,
        tooltip="Vendor's proximity to the wedding venue",
        benefit=True,
        category="Location",
    ),
]


def criterion_labels(criteria: Sequence[Criterion]) -> List[str]:
    """Column labels ``Q1..Qn`` in criterion order."""
    return [f"Q{i + 1}" for i in range(len(criteria))]


def weight_vector(criteria: Sequence[Criterion]) -> np.ndarray:
    return np.array([c.weight for c in criteria], dtype=float)


def benefit_mask(criteria: Sequence[Criterion]) -> np.ndarray:
    return np.array([c.benefit for c in criteria], dtype=bool)


def validate_criteria(criteria: Sequence[Criterion]) -> List[Criterion]:
    """
    Check a criteria list before it is used for ranking.

    Raises
    ------
    CriteriaError
        If the list is empty or a weight is negative or not finite.
    """
    criteria = list(criteria)
    if not criteria:
        raise CriteriaError("At least one criterion is required")
    for i, c in enumerate(criteria, 1):
        try:
            weight = float(c.weight)
        except (TypeError, ValueError):
            raise CriteriaError(f"Q{i} ({c.text!r}) has a non-numeric weight: {c.weight!r}")
        if not math.isfinite(weight) or weight < 0:
            raise CriteriaError(f"Q{i} ({c.text!r}) has an invalid weight: {c.weight!r}")
    return criteria


def criteria_frame(criteria: Sequence[Criterion]) -> pd.DataFrame:
    """Criteria as a table indexed by ``Q1..Qn``, weights also as percent."""
    df = pd.DataFrame([asdict(c) for c in criteria], index=criterion_labels(criteria))
    df['kind'] = [c.kind for c in criteria]
    df['weight_pct'] = df['weight'] * 100
    return df


def load_criteria(path: Union[str, Path]) -> List[Criterion]:
    """
    Load a criteria list from a JSON file.

    The file holds a list of objects with ``text`` and ``weight`` and,
    optionally, ``benefit``, ``category`` and ``tooltip``.
    """
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise CriteriaError(f"{path}: expected a JSON list of criteria")

    criteria = []
    for i, item in enumerate(raw, 1):
        if not isinstance(item, dict) or 'text' not in item or 'weight' not in item:
            raise CriteriaError(f"{path}: criterion {i} needs 'text' and 'weight'")
        criteria.append(Criterion(
            text=str(item['text']),
            weight=item['weight'],
            benefit=bool(item.get('benefit', True)),
            category=str(item.get('category', '')),
            tooltip=str(item.get('tooltip', '')),
        ))
    return validate_criteria(criteria)


def save_criteria(criteria: Sequence[Criterion], path: Union[str, Path]) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(criteria_to_dict(criteria), f, indent=2)


def criteria_to_dict(criteria: Sequence[Criterion]) -> List[Dict]:
    return [asdict(c) for c in criteria]
