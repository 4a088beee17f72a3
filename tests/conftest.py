"""
Shared test fixtures for the patio-cover layout engine tests.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shade_planner import (
    EngineConfig,
    LayoutEngine,
    PatioDesign,
    PlanScale,
    Post,
    PostConstraints,
    ShadeConstraints,
    ShadeRectangle,
)


@pytest.fixture
def scale():
    """Default scale: 10 plan units per foot."""
    return PlanScale()


@pytest.fixture
def engine():
    return LayoutEngine(EngineConfig())


@pytest.fixture
def shade_constraints():
    """Application defaults with enforcement switched on."""
    return ShadeConstraints(
        enabled=True,
        min_width=8.0,
        max_width=30.0,
        min_height=8.0,
        max_height=20.0,
        min_post_spacing=6.0,
        max_post_spacing=20.0,
    )


@pytest.fixture
def precision_constraints():
    """Precision placement on, 10ft exact spacing, no alignment."""
    return PostConstraints(enabled=True, exact_distance=10.0)


@pytest.fixture
def square_shade():
    """A 10x10ft shade rectangle at the origin."""
    return ShadeRectangle(x=0.0, y=0.0, width=100.0, height=100.0)


@pytest.fixture
def two_post_design(square_shade):
    """Two posts on the shade's bottom edge, 12ft apart."""
    return PatioDesign(
        posts=(Post(0.0, 100.0, "a"), Post(120.0, 100.0, "b")),
        shade_area=square_shade,
    )
