"""Pytest configuration and shared fixtures."""

import pytest
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from infracomply.core.config import ComplianceConfig
from infracomply.core.project import Project, ProjectStatus, Sector
from infracomply.alerts.store import InMemoryAlertStore
from infracomply.simulator.projects import ProjectBookGenerator, BookProfile


@pytest.fixture(scope="session")
def test_config():
    """Test configuration fixture."""
    return ComplianceConfig.load_default()


@pytest.fixture
def temp_dir():
    """Temporary directory fixture."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    """Clock fixed at 2026-10-19 10:00 UTC."""
    return FixedClock(datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def alert_store(clock):
    """Empty alert store on the fixed clock."""
    return InMemoryAlertStore(clock=clock)


@pytest.fixture
def on_track_project():
    """Highway project on schedule and on budget."""
    return Project(
        project_id="proj_on_track",
        loan_id="LN100001",
        borrower_name="Western Expressway Ltd",
        sector=Sector.HIGHWAY,
        sanction_amount=500.0,
        disbursed_amount=320.0,
        actual_cost=480.0,
        dcco_status=0,
    )


@pytest.fixture
def deferred_project():
    """Power project 95 days late with a 20% cost overrun."""
    return Project(
        project_id="proj_deferred",
        loan_id="LN100002",
        borrower_name="Deccan Thermal Power Corp",
        sector=Sector.POWER,
        sanction_amount=100.0,
        disbursed_amount=90.0,
        actual_cost=120.0,
        dcco_status=95,
    )


@pytest.fixture
def stressed_cre_project():
    """CRE project 200 days late with a 12% cost overrun."""
    return Project(
        project_id="proj_cre",
        loan_id="LN100003",
        borrower_name="Skyline Realty Ltd",
        sector=Sector.CRE,
        sanction_amount=250.0,
        disbursed_amount=250.0,
        actual_cost=280.0,
        dcco_status=200,
    )


@pytest.fixture
def closed_project():
    """Closed residential project far past DCCO."""
    return Project(
        project_id="proj_closed",
        loan_id="LN100004",
        borrower_name="Harbour View Developers",
        sector=Sector.RESIDENTIAL,
        status=ProjectStatus.CLOSED,
        sanction_amount=80.0,
        actual_cost=120.0,
        dcco_status=400,
    )


@pytest.fixture
def mixed_book(on_track_project, deferred_project, stressed_cre_project, closed_project):
    """Small book with one project in each situation."""
    return [on_track_project, deferred_project, stressed_cre_project, closed_project]


@pytest.fixture
def synthetic_book():
    """Seeded balanced book."""
    generator = ProjectBookGenerator(seed=42)
    return generator.generate_projects(count=60, profile=BookProfile.BALANCED)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "test_properties" in item.nodeid:
            item.add_marker(pytest.mark.property)

        if "integration" in item.nodeid or "test_engine" in item.nodeid:
            item.add_marker(pytest.mark.integration)

