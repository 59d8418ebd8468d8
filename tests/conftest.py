"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import logging

import pytest
import structlog
from pathlib import Path
from typing import Any, Dict

from association_validator.config import Settings
from association_validator.models.associations import (
    Association,
    Dataset,
    ValidationResult,
)


@pytest.fixture(autouse=True)
def isolated_logging():
    """Undo logging configuration done by a test (the CLI configures the root logger)."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"MAX_ROLE_PER_COMPANY": 1})
    """
    return Settings(
        # === Application ===
        APP_NAME="Association Validator (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Remote API ===
        API_BASE_URL="https://api.test.local/v3/problem",
        API_USER_KEY="test-user-key",
        API_TIMEOUT=5.0,
        API_MAX_RETRIES=3,
        API_RETRY_BACKOFF_BASE=0.0,  # No sleeping between retries in tests

        # === Validation Limits ===
        MAX_ROLE_PER_COMPANY=5,
        MAX_ROLE_PER_CONTACT=2,

        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_dataset_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load sample dataset fixture as raw camelCase dict."""
    with open(fixtures_dir / "sample_dataset.json") as f:
        return json.load(f)


@pytest.fixture
def sample_expected_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load the expected result for the sample dataset as raw camelCase dict."""
    with open(fixtures_dir / "sample_expected_result.json") as f:
        return json.load(f)


@pytest.fixture
def sample_dataset(sample_dataset_data: Dict[str, Any]) -> Dataset:
    """Parsed Dataset instance from sample fixture."""
    return Dataset.model_validate(sample_dataset_data)


@pytest.fixture
def sample_expected_result(sample_expected_data: Dict[str, Any]) -> ValidationResult:
    """Parsed ValidationResult expected for the sample dataset."""
    return ValidationResult.model_validate(sample_expected_data)


@pytest.fixture
def make_dataset():
    """Factory fixture to build a Dataset from (company, contact, role) tuples.

    Usage:
        def test_something(make_dataset):
            dataset = make_dataset(existing=[(1, 1, "CEO")], new=[(1, 2, "CEO")])
    """
    def _create(existing=(), new=()) -> Dataset:
        return Dataset(
            existing_associations=[assoc(*fields) for fields in existing],
            new_associations=[assoc(*fields) for fields in new],
        )
    return _create


def assoc(company_id: int, contact_id: int, role: str) -> Association:
    """Shorthand used by tests to build an Association."""
    return Association(company_id=company_id, contact_id=contact_id, role=role)
