# -*- coding: utf-8 -*-
"""
TOPSIS: Technique for Order Preference by Similarity to Ideal Solution
=======================================================================

Ranks vendors by their relative closeness to an ideal vendor built from
the best observed answer on every criterion.

    r_ij = x_ij / sqrt(Σ_i x_ij²)          (vector normalisation)
    v_ij = w_j × r_ij                       (weighting)
    A+_j = max_i v_ij | min_i v_ij          (benefit | cost)
    A-_j = min_i v_ij | max_i v_ij
    S+_i = ||v_i − A+||,  S-_i = ||v_i − A-||
    C_i  = S-_i / (S+_i + S-_i)

Degenerate inputs never raise: an all-zero criterion column normalises
to zeros, and a vendor with S+ + S- equal to zero (a single vendor, or
vendors answering identically) gets the neutral closeness 0.5.

Every function here is pure. Inputs are never mutated.

References
----------
[1] Hwang, C.L. & Yoon, K. (1981). "Multiple Attribute Decision Making:
    Methods and Applications." Springer-Verlag, Berlin.
"""

import numpy as np
import pandas as pd
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..config import TOPSISConfig
from ..criteria import (
    Criterion, benefit_mask, criterion_labels, validate_criteria, weight_vector,
)
from ..exceptions import IncompleteResponseError, ValidationError
from ..models import Alternative, RankingResult, UNANSWERED


@dataclass
class TOPSISResult:
    """Result container for a TOPSIS run, with every intermediate stage."""
    results: List[RankingResult]             # Sorted by rank
    decision_matrix: pd.DataFrame            # Raw 0/1 answers
    normalized_matrix: pd.DataFrame          # Vector-normalised matrix
    weighted_matrix: pd.DataFrame            # Weighted normalised matrix
    ideal_solution: pd.Series                # A+
    anti_ideal_solution: pd.Series           # A-
    d_positive: pd.Series                    # Distance to ideal
    d_negative: pd.Series                    # Distance to anti-ideal
    scores: pd.Series                        # Closeness, insertion order
    weights: Dict[str, float]

    @property
    def ranks(self) -> pd.Series:
        """Rank per vendor identifier, insertion order."""
        by_id = {r.identifier: r.rank for r in self.results}
        return pd.Series([by_id[i] for i in self.scores.index],
                         index=self.scores.index, name='TOPSIS_Rank')

    @property
    def winner(self) -> RankingResult:
        return self.results[0]

    def top_n(self, n: int = 3) -> pd.DataFrame:
        return pd.DataFrame({
            'Vendor': [r.name for r in self.results[:n]],
            'Score': [r.closeness for r in self.results[:n]],
            'Rank': [r.rank for r in self.results[:n]],
        })

    def summary(self) -> str:
        lines = [
            f"\n{'='*60}",
            "TOPSIS VENDOR RANKING",
            f"{'='*60}",
            f"\nVendors: {len(self.results)}",
            f"Criteria: {len(self.weights)}",
            "\nRanking:",
        ]
        for r in self.results:
            lines.append(f"  {r.rank}. {r.name}: Score={r.closeness:.4f} ({r.percentage:.1f}%)")
        lines.append("=" * 60)
        return "\n".join(lines)


# =========================================================================
# Validation and matrix construction
# =========================================================================

def validate_responses(alternatives: Sequence[Alternative],
                       criteria: Sequence[Criterion],
                       unanswered: int = UNANSWERED) -> None:
    """
    Reject a run before any computation when an answer is missing.

    Raises
    ------
    ValidationError
        No vendors, a response vector of the wrong length, or a value
        other than 0/1.
    IncompleteResponseError
        For the first vendor (in order) with an unanswered criterion.
    """
    if not alternatives:
        raise ValidationError("At least one vendor is required")

    n = len(criteria)
    for alt in alternatives:
        if len(alt.responses) != n:
            raise ValidationError(
                f"{alt.name} has {len(alt.responses)} answers, expected {n}"
            )
        for j, value in enumerate(alt.responses):
            if value == unanswered:
                raise IncompleteResponseError(alt.name, alt.identifier, j)
            if value not in (0, 1):
                raise ValidationError(
                    f"{alt.name}: answer to Q{j + 1} must be 0 or 1, got {value!r}"
                )


def build_decision_matrix(alternatives: Sequence[Alternative],
                          criteria: Sequence[Criterion]) -> pd.DataFrame:
    """Vendors × criteria matrix, rows in insertion order."""
    return pd.DataFrame(
        [list(alt.responses) for alt in alternatives],
        index=pd.Index([alt.identifier for alt in alternatives], name='Vendor'),
        columns=criterion_labels(criteria),
        dtype=float,
    )


# =========================================================================
# Stages
# =========================================================================

def normalize_matrix(X: np.ndarray) -> np.ndarray:
    """Vector-normalise each column; all-zero columns stay zero."""
    X = np.asarray(X, dtype=float)
    norm = np.sqrt((X ** 2).sum(axis=0))
    normalized = np.zeros_like(X)
    nonzero = norm != 0
    normalized[:, nonzero] = X[:, nonzero] / norm[nonzero]
    return normalized


def apply_weights(normalized: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """Scale each column by its criterion weight, weights used as given."""
    return np.asarray(normalized, dtype=float) * np.asarray(weights, dtype=float)


def determine_ideal_solutions(weighted: np.ndarray,
                              benefit: np.ndarray
                              ) -> Tuple[np.ndarray, np.ndarray]:
    """Ideal and anti-ideal vectors honouring benefit/cost polarity."""
    weighted = np.asarray(weighted, dtype=float)
    benefit = np.asarray(benefit, dtype=bool)
    col_max = weighted.max(axis=0)
    col_min = weighted.min(axis=0)
    ideal = np.where(benefit, col_max, col_min)
    anti_ideal = np.where(benefit, col_min, col_max)
    return ideal, anti_ideal


def calculate_separation(weighted: np.ndarray,
                         ideal: np.ndarray,
                         anti_ideal: np.ndarray
                         ) -> Tuple[np.ndarray, np.ndarray]:
    """Euclidean distance of every row to A+ and A-; NaN becomes 0."""
    weighted = np.asarray(weighted, dtype=float)
    d_pos = np.sqrt(((weighted - ideal) ** 2).sum(axis=1))
    d_neg = np.sqrt(((weighted - anti_ideal) ** 2).sum(axis=1))
    d_pos[np.isnan(d_pos)] = 0.0
    d_neg[np.isnan(d_neg)] = 0.0
    return d_pos, d_neg


def calculate_closeness(d_pos: np.ndarray,
                        d_neg: np.ndarray,
                        neutral: float = 0.5) -> np.ndarray:
    """
    Relative closeness S- / (S+ + S-).

    A zero or non-finite total yields ``neutral``; any other non-finite
    score is clamped to 0.
    """
    d_pos = np.asarray(d_pos, dtype=float)
    d_neg = np.asarray(d_neg, dtype=float)
    total = d_pos + d_neg
    degenerate = (total == 0) | ~np.isfinite(total)
    with np.errstate(divide='ignore', invalid='ignore'):
        closeness = np.where(degenerate, neutral,
                             d_neg / np.where(degenerate, 1.0, total))
    closeness[~np.isfinite(closeness)] = 0.0
    return closeness


def rank_alternatives(alternatives: Sequence[Alternative],
                      closeness: np.ndarray) -> List[RankingResult]:
    """Stable sort by closeness descending; ties keep insertion order."""
    closeness = np.asarray(closeness, dtype=float)
    order = np.argsort(-closeness, kind='stable')
    results = []
    for position, i in enumerate(order):
        alt = alternatives[i]
        score = float(closeness[i])
        results.append(RankingResult(
            name=alt.name,
            closeness=score,
            percentage=score * 100,
            rank=position + 1,
            original_values=list(alt.responses),
            color=alt.color,
            identifier=alt.identifier,
        ))
    return results


# =========================================================================
# Calculator
# =========================================================================

class TOPSISCalculator:
    """
    TOPSIS calculator for binary vendor questionnaires.

    Parameters
    ----------
    config : TOPSISConfig, optional
        Unanswered sentinel and neutral closeness.
    """

    def __init__(self, config: Optional[TOPSISConfig] = None):
        self.config = config or TOPSISConfig()

    def calculate(self,
                  alternatives: Sequence[Alternative],
                  criteria: Sequence[Criterion]) -> TOPSISResult:
        """
        Calculate closeness scores and rankings.

        Parameters
        ----------
        alternatives : sequence of Alternative
            Vendors with every criterion answered.
        criteria : sequence of Criterion
            Weighted criteria, in answer order.

        Returns
        -------
        TOPSISResult
            Ranked results and all intermediate matrices.

        Raises
        ------
        IncompleteResponseError
            If a vendor has an unanswered criterion; nothing is computed.
        """
        criteria = validate_criteria(criteria)
        alternatives = list(alternatives)
        validate_responses(alternatives, criteria, self.config.unanswered)

        # Step 1: Decision matrix
        decision = build_decision_matrix(alternatives, criteria)
        labels = list(decision.columns)
        weights = weight_vector(criteria)

        # Step 2: Normalize
        normalized = normalize_matrix(decision.values)

        # Step 3: Apply weights
        weighted = apply_weights(normalized, weights)

        # Step 4: Ideal solutions
        ideal, anti_ideal = determine_ideal_solutions(weighted, benefit_mask(criteria))

        # Step 5: Separation measures
        d_pos, d_neg = calculate_separation(weighted, ideal, anti_ideal)

        # Step 6: Closeness
        closeness = calculate_closeness(d_pos, d_neg, self.config.neutral_closeness)

        # Step 7: Rank
        results = rank_alternatives(alternatives, closeness)

        index = decision.index
        return TOPSISResult(
            results=results,
            decision_matrix=decision,
            normalized_matrix=pd.DataFrame(normalized, index=index, columns=labels),
            weighted_matrix=pd.DataFrame(weighted, index=index, columns=labels),
            ideal_solution=pd.Series(ideal, index=labels, name='Ideal'),
            anti_ideal_solution=pd.Series(anti_ideal, index=labels, name='Anti_Ideal'),
            d_positive=pd.Series(d_pos, index=index, name='D_Positive'),
            d_negative=pd.Series(d_neg, index=index, name='D_Negative'),
            scores=pd.Series(closeness, index=index, name='TOPSIS_Score'),
            weights=dict(zip(labels, weights.tolist())),
        )


def run_ranking(alternatives: Sequence[Alternative],
                criteria: Sequence[Criterion],
                config: Optional[TOPSISConfig] = None) -> List[RankingResult]:
    """Convenience function: ranked results only."""
    return TOPSISCalculator(config).calculate(alternatives, criteria).results
