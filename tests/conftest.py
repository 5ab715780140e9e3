"""Pytest configuration and fixtures for columnar_db tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
import structlog
from prometheus_client import CollectorRegistry

from columnar_db.adapters.outbound import InMemoryTableStore
from columnar_db.adapters.outbound import json_table_store as json_table_store_module
from columnar_db.application import database as database_module
from columnar_db.application import ColumnarDatabase
from columnar_db.domain.services import Catalog
from columnar_db.domain.services import catalog as catalog_module
from columnar_db.infrastructure.config import Config, StorageConfig
from columnar_db.infrastructure.metrics import MetricsRegistry


@pytest.fixture(autouse=True)
def _reset_structlog() -> Generator[None, None, None]:
    """Undo any setup_logging() call so later tests don't log to a closed capture stream."""
    yield
    structlog.reset_defaults()
    # Module-level loggers cache their configured logger on first use; rebind them.
    for module in (database_module, catalog_module, json_table_store_module):
        module.logger = structlog.get_logger(module.__name__)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with a temporary data directory."""
    return Config(
        storage=StorageConfig(
            data_dir=temp_dir / "data",
            sync_mode="none",  # Faster for tests
        ),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def memory_store() -> InMemoryTableStore:
    """Provide an empty in-memory table store."""
    return InMemoryTableStore()


@pytest.fixture
def catalog(memory_store: InMemoryTableStore) -> Catalog:
    """Provide a catalog over an empty in-memory store."""
    return Catalog.open(memory_store)


@pytest.fixture
def db(
    test_config: Config, metrics_registry: MetricsRegistry
) -> Generator[ColumnarDatabase, None, None]:
    """Provide a started database over a temporary directory."""
    database = ColumnarDatabase(config=test_config, metrics=metrics_registry)
    database.start()
    yield database
    if database.is_started:
        database.stop()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
