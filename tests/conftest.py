"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gentle_study.core.log import configure_logging  # noqa: E402
from gentle_study.core.models import (  # noqa: E402
    Chronotype,
    LearnerProfile,
    StudyIntensity,
    Topic,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """A fixed reference time (Monday 2026-03-02 18:45)."""
    return datetime(2026, 3, 2, 18, 45)


@pytest.fixture
def adult_profile():
    """Provide a 30-year-old morning learner."""
    return LearnerProfile(
        id="learner-001",
        name="Sam",
        age=30,
        chronotype=Chronotype.MORNING,
        chronotype_score=4,
        study_intensity=StudyIntensity.CASUAL,
    )


@pytest.fixture
def teen_profile():
    """Provide a 16-year-old casual learner."""
    return LearnerProfile(
        id="learner-002",
        age=16,
        chronotype=Chronotype.EVENING,
        chronotype_score=4.5,
        study_intensity=StudyIntensity.CASUAL,
    )


@pytest.fixture
def senior_profile():
    """Provide a 70-year-old learner."""
    return LearnerProfile(
        id="learner-003",
        age=70,
        chronotype=Chronotype.INTERMEDIATE,
        chronotype_score=3,
        study_intensity=StudyIntensity.CASUAL,
    )


@pytest.fixture
def two_topics():
    """A hard and an easy topic, 30 minutes each."""
    return [
        Topic(id="calc", name="Calculus", difficulty=5, time_required=30),
        Topic(id="vocab", name="Vocabulary", difficulty=1, time_required=30),
    ]


@pytest.fixture(autouse=True)
def reset_logging():
    """Point loguru back at the real stderr after each test."""
    yield
    configure_logging("WARNING")
