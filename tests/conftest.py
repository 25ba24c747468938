"""Pytest configuration and shared fixtures for member mesh tests."""

from __future__ import annotations

import pytest

from membermesh.domain import CrossSectionProfile, NamedSection, SectionPosition, Vector3
from membermesh.domain.services import build_profile
from membermesh.domain.value_objects import BoxShape, HShape, PipeShape, RectangleShape


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared profile fixtures
# =============================================================================


@pytest.fixture
def box_profile() -> CrossSectionProfile:
    """300 x 300 box section with 20 mm walls."""
    return build_profile(BoxShape(height=300.0, width=300.0, wall_thickness=20.0))


@pytest.fixture
def h_profile() -> CrossSectionProfile:
    """400 deep H section."""
    return build_profile(
        HShape(depth=400.0, width=200.0, web_thickness=9.0, flange_thickness=14.0)
    )


@pytest.fixture
def deep_h_profile() -> CrossSectionProfile:
    """600 deep H section with the same vertex layout as ``h_profile``."""
    return build_profile(
        HShape(depth=600.0, width=200.0, web_thickness=9.0, flange_thickness=14.0)
    )


@pytest.fixture
def pipe_profile() -> CrossSectionProfile:
    """219 mm pipe with 8 mm walls, 16 segments."""
    return build_profile(PipeShape(diameter=219.0, wall_thickness=8.0, segments=16))


@pytest.fixture
def small_rectangle() -> CrossSectionProfile:
    """100 x 50 solid rectangle."""
    return build_profile(RectangleShape(height=100.0, width=50.0))


@pytest.fixture
def large_rectangle() -> CrossSectionProfile:
    """200 x 100 solid rectangle."""
    return build_profile(RectangleShape(height=200.0, width=100.0))


@pytest.fixture
def origin() -> Vector3:
    return Vector3.zero()


@pytest.fixture
def box_sections(box_profile: CrossSectionProfile) -> list[NamedSection]:
    """A single START section of the box profile."""
    return [NamedSection(SectionPosition.START, box_profile)]
