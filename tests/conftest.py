"""Pytest configuration and shared fixtures for the docbook2adoc test suite.

This module provides shared fixtures and test configuration used across
the unit and integration tests.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

DOCBOOK5_NS = 'xmlns="http://docbook.org/ns/docbook"'


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - complete conversion workflows")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test files.

    Returns
    -------
    Path
        Directory removed by pytest after the test session.

    """
    return tmp_path


@pytest.fixture
def sample_book() -> str:
    """Provide a small DocBook 5 book used across tests."""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<book {DOCBOOK5_NS}>
<info>
<title>Document Title</title>
<author>
<firstname>Doc</firstname>
<surname>Writer</surname>
<email>doc@example.com</email>
</author>
</info>
<section>
<title>First Section</title>
<para>content</para>
</section>
</book>
"""
