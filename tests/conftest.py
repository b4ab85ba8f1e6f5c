"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Generator

import pytest

# Keep CLI output free of warning logs
os.environ.setdefault("WAVEPLAN_LOG_LEVEL", "ERROR")


@pytest.fixture
def clean_settings() -> Generator:
    """Clear the settings cache around a test."""
    from waveplan.core.config import clear_settings_cache

    clear_settings_cache()

    yield

    clear_settings_cache()


@pytest.fixture
def sample_plan() -> str:
    """Provide a sample plan document with four tasks."""
    return """# Implementation Plan

## Phase 1: Foundation

### TASK-001: Database Schema
**Dependencies**: None
**Estimated Time**: 2 hours

Create database schema for users and products.

### TASK-002: User Model
**Dependencies**: TASK-001
**Estimated Time**: 1 hour

### TASK-003: Product Model
**Dependencies**: TASK-001 (needs database schema)
**Estimated Time**: 1.5 hours

## Phase 2: Integration

### TASK-004: API Integration
**Dependencies**: TASK-002, TASK-003
**Estimated Time**: 30 minutes

Wire the models into the REST layer.
"""


@pytest.fixture
def sample_graph():
    """Provide a diamond-shaped task graph."""
    from waveplan.scheduling.models import TaskGraph

    return TaskGraph.from_mapping({
        "TASK-001": {"name": "Database Schema", "dependencies": [], "estimated_time": 120},
        "TASK-002": {"name": "User Model", "dependencies": ["TASK-001"], "estimated_time": 60},
        "TASK-003": {"name": "Product Model", "dependencies": ["TASK-001"], "estimated_time": 90},
        "TASK-004": {
            "name": "API Integration",
            "dependencies": ["TASK-002", "TASK-003"],
            "estimated_time": 30,
        },
    })


@pytest.fixture
def cyclic_graph():
    """Provide a graph with a two-task cycle."""
    from waveplan.scheduling.models import TaskGraph

    return TaskGraph.from_mapping({
        "TASK-001": {"dependencies": ["TASK-002"]},
        "TASK-002": {"dependencies": ["TASK-001"]},
    })


@pytest.fixture
def plan_file(tmp_path, sample_plan):
    """Write the sample plan to disk."""
    path = tmp_path / "PLAN.md"
    path.write_text(sample_plan)
    return path


# Markers
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
