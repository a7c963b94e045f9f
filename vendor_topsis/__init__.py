# -*- coding: utf-8 -*-
"""
Vendor TOPSIS: Multi-Criteria Ranking of Wedding Vendors
========================================================

Ranks candidate vendors from yes/no answers to a fixed list of weighted
questions, using TOPSIS (closeness to an ideal vendor).

Package Structure
-----------------
vendor_topsis/
├── config.py           # Dataclass configuration
├── logger.py           # Logging setup, phase progress, ranking tables
├── exceptions.py       # Validation and session errors
├── criteria.py         # Criterion, default vendor questions, JSON loading
├── models.py           # Alternative, RankingResult
├── session.py          # RankingSession (vendors, answers, run gate)
├── mcdm/
│   └── topsis.py       # Pure TOPSIS stages and calculator
├── data_loader.py      # CSV answer sheets, synthetic sessions
├── output_manager.py   # Delimited-text export, JSON, text report
├── visualization.py    # Closeness and weight charts
├── storage.py          # Append-only record store
└── pipeline.py         # End-to-end orchestration

Quick Start
-----------
>>> from vendor_topsis import RankingSession
>>> session = RankingSession()
>>> vendor = session.alternatives[0]
>>> for j in range(session.n_criteria):
...     session.set_response(vendor.identifier, j, 1)
>>> result = session.run()
>>> print(result.summary())
"""

from .config import (
    Config, AnalysisStep, get_default_config, get_config, set_config, reset_config,
)
from .logger import setup_logger, get_logger, get_module_logger, ProgressLogger, PipelineLogger
from .exceptions import (
    TOPSISError, ValidationError, CriteriaError, IncompleteResponseError,
    MinimumAlternativeError, UnknownAlternativeError, RankingInProgressError,
)
from .criteria import Criterion, DEFAULT_CRITERIA, load_criteria, save_criteria
from .models import Alternative, RankingResult, UNANSWERED
from .mcdm import TOPSISCalculator, TOPSISResult, run_ranking
from .session import RankingSession
from .output_manager import OutputManager, export_as_delimited_text, results_to_frame, chart_data
from .storage import RecordStore, MemoryRecordStore, JSONRecordStore
from .data_loader import ResponseDataLoader, load_responses
from .pipeline import RankingPipeline, PipelineResult, run_pipeline

__version__ = "1.0.0"

__all__ = [
    'Config', 'AnalysisStep', 'get_default_config', 'get_config', 'set_config', 'reset_config',
    'setup_logger', 'get_logger', 'get_module_logger', 'ProgressLogger', 'PipelineLogger',
    'TOPSISError', 'ValidationError', 'CriteriaError', 'IncompleteResponseError',
    'MinimumAlternativeError', 'UnknownAlternativeError', 'RankingInProgressError',
    'Criterion', 'DEFAULT_CRITERIA', 'load_criteria', 'save_criteria',
    'Alternative', 'RankingResult', 'UNANSWERED',
    'TOPSISCalculator', 'TOPSISResult', 'run_ranking',
    'RankingSession',
    'OutputManager', 'export_as_delimited_text', 'results_to_frame', 'chart_data',
    'RecordStore', 'MemoryRecordStore', 'JSONRecordStore',
    'ResponseDataLoader', 'load_responses',
    'RankingPipeline', 'PipelineResult', 'run_pipeline',
]
