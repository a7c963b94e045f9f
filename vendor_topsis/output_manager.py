# -*- coding: utf-8 -*-
"""
Output Management for Vendor Ranking Results
=============================================

Tabular export of a ranking plus the ``OutputManager`` that persists a
run into an organised directory structure::

    outputs/
    ├── results/   CSV export and full JSON dump
    └── reports/   plain text report
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .config import DEFAULT_PALETTE, ExportConfig, TOPSISConfig
from .criteria import Criterion, criteria_to_dict, criterion_labels
from .mcdm.topsis import TOPSISResult
from .models import RankingResult

EXPORT_COLUMNS = ["Rank", "Vendor", "Closeness Score", "Percentage"]


# =========================================================================
# Tabular export
# =========================================================================

def results_to_frame(results: Sequence[RankingResult],
                     criteria: Sequence[Criterion]) -> pd.DataFrame:
    """Numeric results table in rank order, one ``Q`` column per criterion."""
    labels = criterion_labels(criteria)
    df = pd.DataFrame({
        'Rank': [r.rank for r in results],
        'Vendor': [r.name for r in results],
        'Closeness Score': [r.closeness for r in results],
        'Percentage': [r.percentage for r in results],
    })
    values = pd.DataFrame([list(r.original_values) for r in results],
                          columns=labels, dtype=int)
    return pd.concat([df, values], axis=1)


def export_as_delimited_text(results: Sequence[RankingResult],
                             criteria: Sequence[Criterion],
                             delimiter: str = ",",
                             closeness_decimals: int = 4,
                             percentage_decimals: int = 1) -> str:
    """
    Encode results as delimited text, header first, no trailing newline.

    Closeness is fixed to ``closeness_decimals`` places and percentage to
    ``percentage_decimals`` places with a ``%`` suffix. Vendor names
    containing the delimiter or quotes are quoted.
    """
    header = EXPORT_COLUMNS + criterion_labels(criteria)
    rows = [
        [
            r.rank,
            r.name,
            f"{r.closeness:.{closeness_decimals}f}",
            f"{r.percentage:.{percentage_decimals}f}%",
            *[int(v) for v in r.original_values],
        ]
        for r in results
    ]
    df = pd.DataFrame(rows, columns=header)
    text = df.to_csv(index=False, sep=delimiter, lineterminator="\n")
    return text.rstrip("\n")


def chart_data(results: Sequence[RankingResult]) -> List[Dict[str, Any]]:
    """Bar-chart series: name, score, color and rank per vendor."""
    data = []
    for i, r in enumerate(results):
        data.append({
            'name': r.name or f"Vendor {i + 1}",
            'score': float(r.closeness),
            'color': r.color or DEFAULT_PALETTE[i % len(DEFAULT_PALETTE)],
            'rank': r.rank or i + 1,
        })
    return data


# =========================================================================
# OutputManager
# =========================================================================

class OutputManager:
    """Manages structured output to ``results/`` and ``reports/``."""

    def __init__(self,
                 base_output_dir: str = 'outputs',
                 export_config: Optional[ExportConfig] = None,
                 topsis_config: Optional[TOPSISConfig] = None):
        self.base_dir = Path(base_output_dir)
        self.results_dir = self.base_dir / 'results'
        self.reports_dir = self.base_dir / 'reports'
        self.export = export_config or ExportConfig()
        self.topsis = topsis_config or TOPSISConfig()
        self._setup_directories()
        self.timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

    def _setup_directories(self) -> None:
        for d in [self.results_dir, self.reports_dir]:
            d.mkdir(parents=True, exist_ok=True)

    # -----------------------------------------------------------------
    # Ranking export
    # -----------------------------------------------------------------

    def save_csv(self,
                 results: Sequence[RankingResult],
                 criteria: Sequence[Criterion]) -> str:
        """Write the delimited-text export."""
        text = export_as_delimited_text(
            results, criteria,
            delimiter=self.export.delimiter,
            closeness_decimals=self.topsis.closeness_decimals,
            percentage_decimals=self.topsis.percentage_decimals,
        )
        path = self.results_dir / self.export.csv_filename
        path.write_text(text, encoding='utf-8')
        return str(path)

    def save_json(self,
                  result: TOPSISResult,
                  criteria: Sequence[Criterion]) -> str:
        """Dump results together with every intermediate stage."""
        payload = {
            'timestamp': self.timestamp,
            'criteria': criteria_to_dict(criteria),
            'results': [r.to_dict() for r in result.results],
            'decision_matrix': result.decision_matrix.to_dict(orient='index'),
            'normalized_matrix': result.normalized_matrix.to_dict(orient='index'),
            'weighted_matrix': result.weighted_matrix.to_dict(orient='index'),
            'ideal_solution': result.ideal_solution.to_dict(),
            'anti_ideal_solution': result.anti_ideal_solution.to_dict(),
            'd_positive': result.d_positive.to_dict(),
            'd_negative': result.d_negative.to_dict(),
        }
        path = self.results_dir / self.export.json_filename
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, default=float)
        return str(path)

    # -----------------------------------------------------------------
    # Text report
    # -----------------------------------------------------------------

    def save_report(self,
                    result: TOPSISResult,
                    criteria: Sequence[Criterion]) -> str:
        """Human-readable report: criteria, ranking, separation measures."""
        labels = criterion_labels(criteria)
        lines = [
            "=" * 70,
            "WEDDING VENDOR SELECTION - TOPSIS ANALYSIS",
            f"Generated: {self.timestamp}",
            "=" * 70,
            "",
            "EVALUATION CRITERIA",
            "-" * 70,
        ]
        for label, c in zip(labels, criteria):
            lines.append(f"  {label:<4} {c.text:<40} {c.weight * 100:5.1f}%  "
                         f"{c.kind:<8} {c.category}")

        lines += ["", "RANKING", "-" * 70]
        for r in result.results:
            answers = " ".join(str(v) for v in r.original_values)
            lines.append(f"  {r.rank:>3}. {r.name:<30} {r.closeness:.4f}  "
                         f"{r.percentage:5.1f}%   [{answers}]")

        lines += ["", "SEPARATION MEASURES", "-" * 70]
        for r in result.results:
            lines.append(f"  {r.name:<30} S+={result.d_positive[r.identifier]:.4f}  "
                         f"S-={result.d_negative[r.identifier]:.4f}")
        lines.append("=" * 70)

        path = self.reports_dir / self.export.report_filename
        path.write_text("\n".join(lines) + "\n", encoding='utf-8')
        return str(path)

    def save_all(self,
                 result: TOPSISResult,
                 criteria: Sequence[Criterion]) -> Dict[str, str]:
        return {
            'csv': self.save_csv(result.results, criteria),
            'json': self.save_json(result, criteria),
            'report': self.save_report(result, criteria),
        }
