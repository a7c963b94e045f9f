# -*- coding: utf-8 -*-
"""Configuration management for the vendor TOPSIS ranking tool."""

from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum
import json


class AnalysisStep(Enum):
    """Step indicator shown while a ranking session progresses."""
    SETUP = 1
    ANALYSIS = 2
    RESULTS = 3


# Eight-colour palette cycled over vendors, in creation order
DEFAULT_PALETTE = [
    "#3B82F6", "#EF4444", "#10B981", "#F59E0B",
    "#8B5CF6", "#EC4899", "#06B6D4", "#84CC16",
]


@dataclass
class PathConfig:
    """File and directory paths configuration."""
    base_dir: Path = field(default_factory=lambda: Path.cwd())
    output_name: str = "outputs"

    @property
    def output_dir(self) -> Path:
        return self.base_dir / self.output_name

    @property
    def results_dir(self) -> Path:
        return self.output_dir / "results"

    @property
    def figures_dir(self) -> Path:
        return self.output_dir / "figures"

    @property
    def reports_dir(self) -> Path:
        return self.output_dir / "reports"

    @property
    def logs_dir(self) -> Path:
        return self.output_dir / "logs"

    @property
    def records_file(self) -> Path:
        return self.output_dir / "records.json"

    def ensure_directories(self) -> None:
        """Create all necessary directories."""
        for d in [self.output_dir, self.results_dir, self.figures_dir,
                  self.reports_dir, self.logs_dir]:
            d.mkdir(parents=True, exist_ok=True)


@dataclass
class TOPSISConfig:
    """TOPSIS computation configuration."""
    unanswered: int = -1
    # Closeness assigned when an alternative is equidistant from both
    # reference points (single vendor, identical vendors)
    neutral_closeness: float = 0.5
    closeness_decimals: int = 4
    percentage_decimals: int = 1


@dataclass
class SessionConfig:
    """Ranking session configuration."""
    name_template: str = "Vendor {n}"
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    min_alternatives: int = 1
    start_with_alternative: bool = True


@dataclass
class ExportConfig:
    """Result export configuration."""
    csv_filename: str = "topsis-vendor-analysis.csv"
    json_filename: str = "topsis-vendor-analysis.json"
    report_filename: str = "topsis-vendor-report.txt"
    delimiter: str = ","
    record_type: str = "topsis_analysis"


@dataclass
class VisualizationConfig:
    """Figure generation configuration."""
    enabled: bool = True
    dpi: int = 150
    figsize: Tuple[int, int] = (10, 6)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    console_level: str = "INFO"
    debug_file: bool = True
    use_colors: bool = False


@dataclass
class Config:
    """Main configuration container."""
    paths: PathConfig = field(default_factory=PathConfig)
    topsis: TOPSISConfig = field(default_factory=TOPSISConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir

    def to_dict(self) -> Dict[str, Any]:
        def _to_dict(obj):
            if is_dataclass(obj):
                return {f.name: _to_dict(getattr(obj, f.name)) for f in fields(obj)}
            elif isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, (list, tuple)):
                return [_to_dict(i) for i in obj]
            elif isinstance(obj, dict):
                return {k: _to_dict(v) for k, v in obj.items()}
            return obj
        return _to_dict(self)

    def save(self, filepath: Path) -> None:
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Build a configuration from a (possibly partial) nested dict."""
        config = cls()
        sections = {f.name for f in fields(config)}
        for section_name, values in data.items():
            if section_name not in sections:
                raise ValueError(f"Unknown configuration section: {section_name}")
            if not isinstance(values, dict):
                raise ValueError(f"Configuration section '{section_name}' must be a mapping, "
                                 f"got {type(values).__name__}")
            section = getattr(config, section_name)
            settings = {f.name for f in fields(section)}
            for key, value in values.items():
                if key not in settings:
                    raise ValueError(f"Unknown setting: {section_name}.{key}")
                if key == "base_dir":
                    value = Path(value)
                elif key == "figsize":
                    value = tuple(value)
                setattr(section, key, value)
        return config

    @classmethod
    def load(cls, filepath: Path) -> 'Config':
        with open(filepath, 'r') as f:
            return cls.from_dict(json.load(f))

    def summary(self) -> str:
        return f"""
{'='*60}
CONFIGURATION SUMMARY - Vendor TOPSIS Ranking
{'='*60}

PATHS:
  Output directory: {self.paths.output_dir}

TOPSIS:
  Unanswered sentinel: {self.topsis.unanswered}
  Neutral closeness: {self.topsis.neutral_closeness}
  Closeness decimals: {self.topsis.closeness_decimals}

SESSION:
  Name template: {self.session.name_template}
  Minimum vendors: {self.session.min_alternatives}

EXPORT:
  CSV file: {self.export.csv_filename}
  Delimiter: {self.export.delimiter!r}

VISUALIZATION:
  Enabled: {self.visualization.enabled}
  DPI: {self.visualization.dpi}
{'='*60}
"""


_config: Optional[Config] = None

def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config()
    return _config

def get_default_config() -> Config:
    """Get a fresh default configuration."""
    return Config()

def set_config(config: Config) -> None:
    global _config
    _config = config

def reset_config() -> None:
    global _config
    _config = Config()
