"""
Pytest configuration for SYSQL tests.

This file is automatically loaded by pytest when running from the repo root.
It registers custom markers to avoid warnings.
"""
import warnings


def pytest_configure(config):
    """Register custom markers and filter known warnings."""
    # Filter known warnings from dependencies
    warnings.filterwarnings("ignore", category=DeprecationWarning, module="duckdb.*")

    # Register custom markers
    config.addinivalue_line(
        "markers", "engine: marks tests that execute SQL through an in-memory DuckDB connection"
    )
