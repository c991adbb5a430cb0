"""Pytest configuration and shared fixtures for the md2asciidoc test suite.

This module provides shared fixtures and test configuration that are used
across the entire test suite.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=25, deadline=None)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "property: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def markdown_file(tmp_path: Path):
    """Return a factory that writes Markdown text to a file under ``tmp_path``.

    Returns
    -------
    callable
        ``factory(text, name="doc.md") -> Path``

    """

    def _write(text: str, name: str = "doc.md") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_markdown() -> str:
    """Markdown document exercising the common block and inline constructs."""
    return (
        "# Guide\n"
        "\n"
        "Intro with **bold**, _italic_ and `code`.\n"
        "\n"
        "## Install\n"
        "\n"
        "- first\n"
        "- second\n"
        "\n"
        "```python\n"
        "print('hi')\n"
        "```\n"
    )
