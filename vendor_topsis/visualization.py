# -*- coding: utf-8 -*-
"""
Visualization Module
====================

Bar charts for vendor rankings and criterion weights.
"""

from pathlib import Path
from typing import Optional, Sequence, Tuple

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from .criteria import Criterion, criterion_labels
from .models import RankingResult
from .output_manager import chart_data


class RankingVisualizer:
    """
    Figures for a finished vendor ranking.

    Parameters
    ----------
    output_dir : str
        Directory for saving figures
    figsize : Tuple[int, int]
        Default figure size
    dpi : int
        Figure resolution
    """

    def __init__(self,
                 output_dir: str = 'outputs/figures',
                 figsize: Tuple[int, int] = (10, 6),
                 dpi: int = 150):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.figsize = tuple(figsize)
        self.dpi = dpi

        self.colors = {
            'benefit': '#3B82F6',
            'cost': '#EF4444',
            'grid': '#E0E0E0',
            'dark': '#212121',
        }

    def _save(self, fig, save_name: str) -> str:
        save_path = self.output_dir / save_name
        fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        plt.close(fig)
        return str(save_path)

    def plot_closeness_scores(self,
                              results: Sequence[RankingResult],
                              title: str = 'TOPSIS Closeness Scores',
                              save_name: str = 'closeness_scores.png') -> Optional[str]:
        """Horizontal bars of closeness per vendor, best vendor on top."""
        data = chart_data(results)
        if not data:
            return None

        fig, ax = plt.subplots(figsize=(self.figsize[0], max(3, 0.6 * len(data) + 1.5)))
        names = [f"{d['rank']}. {d['name']}" for d in data][::-1]
        scores = [d['score'] for d in data][::-1]
        colors = [d['color'] for d in data][::-1]

        bars = ax.barh(names, scores, color=colors, edgecolor=self.colors['dark'], linewidth=0.5)
        for bar, score in zip(bars, scores):
            ax.text(min(score + 0.01, 0.97), bar.get_y() + bar.get_height() / 2,
                    f"{score:.4f}", va='center', fontsize=9)

        ax.set_xlim(0, 1)
        ax.set_xlabel('Closeness to ideal vendor', fontsize=11)
        ax.set_title(title, fontsize=13, fontweight='bold')
        ax.grid(True, axis='x', alpha=0.3)
        plt.tight_layout()
        return self._save(fig, save_name)

    def plot_criteria_weights(self,
                              criteria: Sequence[Criterion],
                              title: str = 'Criterion Weights',
                              save_name: str = 'criteria_weights.png') -> Optional[str]:
        """Weight per criterion, coloured by benefit/cost polarity."""
        if not criteria:
            return None

        fig, ax = plt.subplots(figsize=self.figsize)
        labels = [f"{q} {c.category}".strip() for q, c in zip(criterion_labels(criteria), criteria)]
        weights = [c.weight * 100 for c in criteria]
        colors = [self.colors[c.kind] for c in criteria]

        ax.bar(labels, weights, color=colors)
        ax.set_ylabel('Weight (%)', fontsize=11)
        ax.set_title(title, fontsize=13, fontweight='bold')
        ax.tick_params(axis='x', rotation=45)
        for tick in ax.get_xticklabels():
            tick.set_horizontalalignment('right')
        ax.grid(True, axis='y', alpha=0.3)

        handles = [plt.Rectangle((0, 0), 1, 1, color=self.colors[k]) for k in ('benefit', 'cost')]
        ax.legend(handles, ['Benefit', 'Cost'], loc='best')
        plt.tight_layout()
        return self._save(fig, save_name)
