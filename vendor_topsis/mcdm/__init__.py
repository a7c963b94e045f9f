# -*- coding: utf-8 -*-
"""
Multi-Criteria Decision Making Module
=====================================

TOPSIS ranking of vendors answering weighted yes/no criteria.

Usage
-----
>>> from vendor_topsis.mcdm import TOPSISCalculator
>>> result = TOPSISCalculator().calculate(session.alternatives, criteria)
>>> print(result.summary())
"""

from .topsis import (
    TOPSISCalculator,
    TOPSISResult,
    run_ranking,
    validate_responses,
    build_decision_matrix,
    normalize_matrix,
    apply_weights,
    determine_ideal_solutions,
    calculate_separation,
    calculate_closeness,
    rank_alternatives,
)

__all__ = [
    'TOPSISCalculator', 'TOPSISResult', 'run_ranking',
    'validate_responses', 'build_decision_matrix',
    'normalize_matrix', 'apply_weights', 'determine_ideal_solutions',
    'calculate_separation', 'calculate_closeness', 'rank_alternatives',
]
