"""Pytest configuration and shared fixtures for the chaptermark test suite.

This module provides the renderer and image fixtures used across the unit
and integration tests, and the Hypothesis profiles for the property tests.
"""

import os
from pathlib import Path
from typing import Callable

import pytest
from hypothesis import Phase, Verbosity, settings

from chaptermark import BookRenderer, RendererOptions

settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def renderer() -> BookRenderer:
    """Provide a renderer with default options for a single document."""
    return BookRenderer(RendererOptions())


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[[str, int, int], Path]:
    """Provide a factory writing solid PNG images of a given size into a temp dir.

    Returns
    -------
    Callable[[str, int, int], Path]
        ``make_image(name, width, height)`` returning the written path

    """
    image_module = pytest.importorskip("PIL.Image")

    def _make(name: str, width: int, height: int) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        image_module.new("RGB", (width, height), color=(200, 200, 200)).save(path)
        return path

    return _make
