"""Pytest configuration and shared fixtures for wp2md test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from pathlib import Path
from typing import Generator

import pytest
from utils import cleanup_test_dir, create_test_temp_dir, make_item, write_wxr


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "network: Tests that exercise the HTTP layer through a mock transport")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def sample_wxr(temp_dir: Path) -> Path:
    """Provide an export file with one post of every interesting kind.

    Contains a published post, a draft, a published page, a published post
    without body and a published post with an unknown category domain.
    """
    return write_wxr(
        temp_dir,
        make_item(
            title="Hello World",
            post_name="hello-world",
            post_id="1",
            content="<p>Hello <b>world</b></p>",
            categories=["Diary"],
            tags=["python", "blog"],
        ),
        make_item(title="Draft", post_name="draft", post_id="2", status="draft"),
        make_item(title="About", post_name="about", post_id="3", post_type="page"),
        make_item(title="Empty", post_name="empty", post_id="4", content=None),
        make_item(
            title="Broken",
            post_name="broken",
            post_id="5",
            extra_categories=[("series", "Odd")],
        ),
    )
