"""Public API for the patio-cover layout constraint and cost engine."""

from shade_planner.contracts import (
    AlignmentAxis,
    CostBreakdown,
    CoverType,
    DesignMode,
    DesignReport,
    LayoutViolation,
    PatioDesign,
    Post,
    PostConstraints,
    ShadeConstraints,
    ShadeRectangle,
    StructuralRating,
)
from shade_planner.engine import LayoutEngine
from shade_planner.pricing import CantileverLimits, EngineConfig, PriceSheet
from shade_planner.units import PlanScale

__all__ = [
    "AlignmentAxis",
    "CantileverLimits",
    "CostBreakdown",
    "CoverType",
    "DesignMode",
    "DesignReport",
    "EngineConfig",
    "LayoutEngine",
    "LayoutViolation",
    "PatioDesign",
    "PlanScale",
    "Post",
    "PostConstraints",
    "PriceSheet",
    "ShadeConstraints",
    "ShadeRectangle",
    "StructuralRating",
]
