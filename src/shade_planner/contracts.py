"""Contracts for the patio-cover layout engine."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

Vec2 = Tuple[float, float]


class CoverType(Enum):
    """Shade cover material. Affects cost rate only."""
    LATTICE = "lattice"
    SOLID_PANEL = "solidPanel"


class AlignmentAxis(Enum):
    """Axis posts are lined up along when parallel alignment is on."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class DesignMode(Enum):
    """What a click on the plan does: place a post or drag the shade."""
    POST = "post"
    SHADE = "shade"


def new_post_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class Post:
    """A support post on the plan (plan-unit coordinates)."""

    x: float
    y: float
    id: str = field(default_factory=new_post_id)

    @property
    def xy(self) -> Vec2:
        return (self.x, self.y)

    def moved(self, x: float, y: float) -> "Post":
        return replace(self, x=float(x), y=float(y))


@dataclass(frozen=True)
class ShadeRectangle:
    """Axis-aligned shade region; (x, y) is the min corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy), shapely ordering."""
        return (self.x, self.y, self.right, self.bottom)


class _Updatable:
    """Spread-style partial update for frozen config dataclasses."""

    def updated(self, **changes):
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise TypeError(
                f"{type(self).__name__} has no field(s): {', '.join(unknown)}"
            )
        return replace(self, **changes)


@dataclass(frozen=True)
class ShadeConstraints(_Updatable):
    """Shade-area and post-spacing bounds. Distances in feet."""

    enabled: bool = False
    min_width: float = 8.0
    max_width: float = 30.0
    min_height: float = 8.0
    max_height: float = 20.0
    min_post_spacing: float = 6.0
    max_post_spacing: float = 20.0
    show_grid: bool = True  # display only
    snap_to_grid: bool = False
    grid_size: float = 1.0


@dataclass(frozen=True)
class PostConstraints(_Updatable):
    """Precision post placement: exact spacing and alignment."""

    enabled: bool = False
    exact_distance: float = 6.0  # feet
    parallel_alignment: bool = False
    alignment_axis: AlignmentAxis = AlignmentAxis.HORIZONTAL


@dataclass(frozen=True)
class LayoutViolation:
    """A single constraint breach in the current design."""

    rule_name: str  # "shade_width_max" | "shade_width_min" | ... | "post_spacing_max"
    message: str
    value: float = 0.0
    limit: float = 0.0
    post_indices: Tuple[int, ...] = ()  # 1-based, pair rules only

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class StructuralRating:
    """Post-size category chosen for a cantilever span."""

    cantilever_span_ft: float
    post_size: str
    is_safe: bool


@dataclass(frozen=True)
class CostBreakdown:
    """Itemized price. ``total`` is the exact sum of the other seven."""

    posts: float = 0.0
    cover: float = 0.0
    hardware: float = 0.0
    installation: float = 0.0
    engineering: float = 0.0
    constraint_penalty: float = 0.0
    precision: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.posts
            + self.cover
            + self.hardware
            + self.installation
            + self.engineering
            + self.constraint_penalty
            + self.precision
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "posts": self.posts,
            "cover": self.cover,
            "hardware": self.hardware,
            "installation": self.installation,
            "engineering": self.engineering,
            "constraintPenalty": self.constraint_penalty,
            "precision": self.precision,
            "total": self.total,
        }


@dataclass(frozen=True)
class PatioDesign:
    """The one design being edited. Every engine action returns a new one."""

    posts: Tuple[Post, ...] = ()
    shade_area: Optional[ShadeRectangle] = None
    cover_type: CoverType = CoverType.LATTICE
    tilt_angle: int = 15  # degrees, 0..45
    mode: DesignMode = DesignMode.POST
    constraints: ShadeConstraints = field(default_factory=ShadeConstraints)
    post_constraints: PostConstraints = field(default_factory=PostConstraints)

    @property
    def precision_mode(self) -> bool:
        return self.post_constraints.enabled

    def post_index(self, post_id: str) -> Optional[int]:
        for i, post in enumerate(self.posts):
            if post.id == post_id:
                return i
        return None


@dataclass(frozen=True)
class DesignReport:
    """Everything the display layer reads after an action."""

    cantilever_span_ft: float
    post_size: str
    is_structurally_safe: bool
    coverage_area_sqft: float
    post_count: int
    violations: List[LayoutViolation]
    costs: CostBreakdown

    def to_dict(self) -> Dict[str, object]:
        return {
            "cantileverSpan": self.cantilever_span_ft,
            "postSize": self.post_size,
            "isStructurallySafe": self.is_structurally_safe,
            "coverageArea": self.coverage_area_sqft,
            "postCount": self.post_count,
            "violations": [v.message for v in self.violations],
            "costs": self.costs.to_dict(),
        }
