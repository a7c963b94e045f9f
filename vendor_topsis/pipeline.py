# -*- coding: utf-8 -*-
"""
Vendor Ranking Pipeline Orchestrator
====================================

Five-phase pipeline:

  Phase 1  Load criteria and vendor answers   (CSV or synthetic)
  Phase 2  TOPSIS ranking                     (step-by-step log)
  Phase 3  Figures                            (closeness, weights)
  Phase 4  Result export                      (CSV / JSON / report)
  Phase 5  Analysis record                    (record store)

The ranking itself is computed in one synchronous call; the step log
of Phase 2 is replayed from the intermediate matrices afterwards.
"""

import time
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from .config import Config, get_default_config
from .criteria import Criterion, DEFAULT_CRITERIA, criteria_to_dict, load_criteria
from .data_loader import ResponseDataLoader
from .logger import PipelineLogger, ProgressLogger, setup_logger
from .mcdm.topsis import TOPSISResult
from .output_manager import OutputManager, results_to_frame
from .session import RankingSession
from .storage import JSONRecordStore, RecordStore
from .visualization import RankingVisualizer


# =========================================================================
# Result container
# =========================================================================

@dataclass
class PipelineResult:
    """Container for all pipeline results."""
    session: RankingSession
    topsis_result: TOPSISResult
    output_files: Dict[str, str] = field(default_factory=dict)
    figure_files: List[str] = field(default_factory=list)
    execution_time: float = 0.0
    config: Optional[Config] = None

    @property
    def criteria(self) -> Sequence[Criterion]:
        return self.session.criteria

    def get_ranking_df(self) -> pd.DataFrame:
        return results_to_frame(self.topsis_result.results, self.criteria)


# =========================================================================
# Pipeline
# =========================================================================

class RankingPipeline:
    """
    End-to-end vendor ranking: load, rank, plot, export, record.

    Parameters
    ----------
    config : Config, optional
        Configuration (fresh default when omitted).
    store : RecordStore, optional
        Where analysis records go; defaults to a JSON file in the
        output directory.
    """

    def __init__(self,
                 config: Optional[Config] = None,
                 store: Optional[RecordStore] = None):
        self.config = config or get_default_config()
        self.config.paths.ensure_directories()

        debug_file = self.config.paths.logs_dir / 'debug.log' if self.config.logging.debug_file else None
        self.logger = setup_logger(
            level=self.config.logging.console_level,
            debug_file=debug_file,
            use_colors=self.config.logging.use_colors,
        )
        self.log = PipelineLogger(self.logger)

        self.store = store if store is not None else JSONRecordStore(self.config.paths.records_file)
        self.output = OutputManager(
            str(self.config.paths.output_dir),
            export_config=self.config.export,
            topsis_config=self.config.topsis,
        )
        self.visualizer = RankingVisualizer(
            output_dir=str(self.config.paths.figures_dir),
            figsize=self.config.visualization.figsize,
            dpi=self.config.visualization.dpi,
        )

    # -----------------------------------------------------------------
    # Main entry point
    # -----------------------------------------------------------------

    def run(self,
            responses_path: Optional[Union[str, Path]] = None,
            criteria_path: Optional[Union[str, Path]] = None,
            n_synthetic: int = 5,
            session: Optional[RankingSession] = None) -> PipelineResult:
        """
        Execute the pipeline.

        Vendors come from ``session`` when given, else from the CSV at
        ``responses_path``, else ``n_synthetic`` random vendors are made.
        """
        start_time = time.time()
        self.log.banner("WEDDING VENDOR TOPSIS RANKING")

        # Phase 1: Load
        with ProgressLogger(self.logger, "Phase 1: Loading Vendors"):
            if session is None:
                criteria = self._load_criteria(criteria_path)
                session = self._load_session(responses_path, criteria, n_synthetic)
            self.log.metrics({
                'Vendors': len(session.alternatives),
                'Criteria': session.n_criteria,
                'Completion': f"{session.completion_percentage():.0f}%",
            })

        # Phase 2: Rank
        with ProgressLogger(self.logger, "Phase 2: TOPSIS Ranking") as progress:
            result = session.run()
            self._log_stages(result, progress)
            self.log.ranking([(r.name, r.closeness) for r in result.results],
                             title="Final ranking")

        # Phase 3: Figures
        figure_files: List[str] = []
        if self.config.visualization.enabled:
            with ProgressLogger(self.logger, "Phase 3: Generating Figures"):
                try:
                    figure_files = self._generate_figures(result, session.criteria)
                except Exception as e:
                    self.logger.warning(f"Visualisation failed: {e}")
                    self.logger.debug(traceback.format_exc())

        # Phase 4: Export
        with ProgressLogger(self.logger, "Phase 4: Saving Results"):
            output_files = self.output.save_all(result, session.criteria)
            for kind, path in output_files.items():
                self.log.metric(kind.upper(), path)

        # Phase 5: Record
        with ProgressLogger(self.logger, "Phase 5: Recording Analysis"):
            self._record(result, session)

        execution_time = time.time() - start_time
        self.logger.info("=" * 60)
        self.logger.info(f"Pipeline completed in {execution_time:.2f}s")
        self.logger.info(f"Outputs → {self.config.paths.output_dir}")
        self.logger.info("=" * 60)

        return PipelineResult(
            session=session,
            topsis_result=result,
            output_files=output_files,
            figure_files=figure_files,
            execution_time=execution_time,
            config=self.config,
        )

    # -----------------------------------------------------------------
    # Phase 1
    # -----------------------------------------------------------------

    def _load_criteria(self, criteria_path) -> List[Criterion]:
        if criteria_path is None:
            return list(DEFAULT_CRITERIA)
        criteria = load_criteria(criteria_path)
        self.logger.info(f"Loaded {len(criteria)} criteria from {criteria_path}")
        return criteria

    def _load_session(self, responses_path, criteria, n_synthetic) -> RankingSession:
        loader = ResponseDataLoader(self.config)
        if responses_path is not None:
            return loader.load(responses_path, criteria)
        self.logger.info(f"No answer sheet given, generating {n_synthetic} synthetic vendors")
        return loader.generate_synthetic(n_synthetic, criteria, seed=42)

    # -----------------------------------------------------------------
    # Phase 2
    # -----------------------------------------------------------------

    def _log_stages(self, result: TOPSISResult, progress: ProgressLogger) -> None:
        self.log.matrix("Decision Matrix", result.decision_matrix)
        progress.log_step("Decision matrix built")
        self.log.matrix("Normalized Matrix", result.normalized_matrix)
        progress.log_step("Matrix normalized")
        self.log.matrix("Weighted Matrix", result.weighted_matrix)
        progress.log_step("Weights applied")
        self.log.matrix("Ideal Solution", result.ideal_solution)
        self.log.matrix("Negative Ideal Solution", result.anti_ideal_solution)
        progress.log_step("Ideal solutions determined")
        self.log.matrix("Separation Measures",
                        pd.concat([result.d_positive, result.d_negative], axis=1))
        progress.log_step("Separation measures calculated")
        self.log.matrix("Closeness Scores", result.scores)
        progress.log_step("Closeness computed and vendors ranked")

    # -----------------------------------------------------------------
    # Phase 3
    # -----------------------------------------------------------------

    def _generate_figures(self, result: TOPSISResult, criteria) -> List[str]:
        paths = [
            self.visualizer.plot_closeness_scores(result.results),
            self.visualizer.plot_criteria_weights(criteria),
        ]
        return [p for p in paths if p]

    # -----------------------------------------------------------------
    # Phase 5
    # -----------------------------------------------------------------

    def _record(self, result: TOPSISResult, session: RankingSession) -> None:
        self.store.append(self.config.export.record_type, {
            'vendors': len(result.results),
            'winner': result.winner.name,
            'criteria': criteria_to_dict(session.criteria),
            'results': [r.to_dict() for r in result.results],
        })
        n_records = len(self.store.records(self.config.export.record_type))
        self.log.metric('Stored analyses', n_records)


def run_pipeline(responses_path: Optional[Union[str, Path]] = None,
                 config: Optional[Config] = None,
                 **kwargs) -> PipelineResult:
    """Convenience function for ``RankingPipeline(config).run``."""
    return RankingPipeline(config).run(responses_path, **kwargs)
