"""
Pytest configuration and fixtures for vendor TOPSIS tests.
"""
import pytest
import numpy as np

from vendor_topsis.config import Config
from vendor_topsis.criteria import Criterion, DEFAULT_CRITERIA
from vendor_topsis.models import Alternative


@pytest.fixture
def config(tmp_path):
    """Configuration writing everything under a temporary directory."""
    cfg = Config()
    cfg.paths.base_dir = tmp_path
    cfg.logging.console_level = "WARNING"
    return cfg


@pytest.fixture
def criteria():
    """The eight default vendor questions."""
    return list(DEFAULT_CRITERIA)


@pytest.fixture
def two_criteria():
    """Two benefit criteria weighted 0.6 / 0.4."""
    return [
        Criterion(text="Within budget?", weight=0.6, benefit=True, category="Cost"),
        Criterion(text="Available?", weight=0.4, benefit=True, category="Availability"),
    ]


@pytest.fixture
def xyz_alternatives():
    """X matches the ideal, Z the anti-ideal, Y sits between."""
    return [
        Alternative("x", "X", [1, 1]),
        Alternative("y", "Y", [1, 0]),
        Alternative("z", "Z", [0, 0]),
    ]


@pytest.fixture
def complete_session(config, criteria):
    """Session of four vendors with every question answered."""
    from vendor_topsis.session import RankingSession

    answers = np.array([
        [1, 1, 1, 1, 1, 0, 1, 1],
        [1, 0, 1, 0, 1, 1, 0, 1],
        [0, 1, 0, 1, 0, 0, 1, 0],
        [0, 0, 0, 0, 0, 1, 0, 0],
    ])
    session = RankingSession(criteria, config, populate=False)
    for row in answers:
        alt = session.add_alternative()
        for j, value in enumerate(row):
            session.set_response(alt.identifier, j, int(value))
    return session
