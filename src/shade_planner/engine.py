"""
Layout engine: user actions in, new designs and reports out.

``LayoutEngine`` holds only its immutable ``EngineConfig``. Each action takes
the current ``PatioDesign`` and returns a new one; the read model
(``evaluate``) is recomputed on demand and never cached.
"""
import logging
import math
from dataclasses import replace
from typing import List, Optional

from shade_planner.contracts import (
    CostBreakdown,
    CoverType,
    DesignMode,
    DesignReport,
    LayoutViolation,
    PatioDesign,
    Post,
    ShadeRectangle,
    StructuralRating,
    Vec2,
)
from shade_planner.costing import compose_cost
from shade_planner.measures import (
    PostSpan,
    cantilever_span,
    consecutive_spans,
    coverage_area,
)
from shade_planner import post_rules
from shade_planner.pricing import EngineConfig
from shade_planner.shade_rules import constrain_shade_rectangle, rect_from_drag
from shade_planner.structural import classify_span
from shade_planner.units import PlanScale
from shade_planner.violations import check_layout_violations

logger = logging.getLogger(__name__)

MIN_TILT_DEG = 0
MAX_TILT_DEG = 45
DEFAULT_TILT_DEG = 15


class LayoutEngine:
    """Deterministic transforms of (posts, shade area, config)."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    @property
    def scale(self) -> PlanScale:
        return self.config.scale

    # ─── Posts ──────────────────────────────────────────────────────────────

    def add_post(
        self,
        design: PatioDesign,
        x: float,
        y: float,
        post_id: Optional[str] = None,
    ) -> PatioDesign:
        """Place a post; a refused placement returns the design unchanged."""
        posts = post_rules.place_post(
            design.posts, x, y, design.constraints, self.scale, post_id=post_id,
        )
        if len(posts) == len(design.posts):
            return design
        mode = DesignMode.SHADE if len(posts) >= 2 else DesignMode.POST
        return replace(design, posts=posts, mode=mode)

    def remove_post(self, design: PatioDesign, post_id: str) -> PatioDesign:
        """Drop a post. Below two posts the shade area goes with it."""
        posts = post_rules.remove_post(design.posts, post_id)
        if len(posts) == len(design.posts):
            return design
        if len(posts) < 2:
            return replace(design, posts=posts, shade_area=None, mode=DesignMode.POST)
        return replace(design, posts=posts)

    def move_post(
        self,
        design: PatioDesign,
        post_id: str,
        x: float,
        y: float,
    ) -> PatioDesign:
        if design.post_index(post_id) is None:
            return design
        posts = post_rules.move_post(
            design.posts, post_id, x, y,
            design.constraints, design.post_constraints, self.scale,
        )
        return replace(design, posts=posts)

    def post_at(
        self,
        design: PatioDesign,
        x: float,
        y: float,
        tolerance: float = post_rules.POST_PICK_TOLERANCE_UNITS,
    ) -> Optional[Post]:
        return post_rules.post_at(design.posts, x, y, tolerance)

    def apply_post_constraints(self, design: PatioDesign) -> PatioDesign:
        """The explicit "apply" action for precision placement."""
        posts = post_rules.apply_post_constraints(
            design.posts, design.post_constraints, self.scale,
        )
        return replace(design, posts=posts)

    def constrain_all_posts(self, design: PatioDesign) -> PatioDesign:
        posts = post_rules.constrain_all_posts(
            design.posts, design.post_constraints, self.scale,
        )
        return replace(design, posts=posts)

    # ─── Shade area ─────────────────────────────────────────────────────────

    def set_shade_area(
        self,
        design: PatioDesign,
        rect: Optional[ShadeRectangle],
    ) -> PatioDesign:
        rect = constrain_shade_rectangle(rect, design.constraints, self.scale)
        return replace(design, shade_area=rect)

    def drag_shade(self, design: PatioDesign, start: Vec2, end: Vec2) -> PatioDesign:
        """Shade rectangle from a pointer drag; needs at least two posts."""
        if len(design.posts) < 2:
            return design
        start = post_rules.snap_incoming(start[0], start[1], design.constraints, self.scale)
        end = post_rules.snap_incoming(end[0], end[1], design.constraints, self.scale)
        return self.set_shade_area(design, rect_from_drag(start, end))

    # ─── Configuration edits ────────────────────────────────────────────────

    def set_constraints(self, design: PatioDesign, **changes) -> PatioDesign:
        return replace(design, constraints=design.constraints.updated(**changes))

    def toggle_constraints(self, design: PatioDesign) -> PatioDesign:
        return self.set_constraints(design, enabled=not design.constraints.enabled)

    def set_post_constraints(self, design: PatioDesign, **changes) -> PatioDesign:
        """Edit precision-placement settings; re-applies them while enabled."""
        design = replace(
            design, post_constraints=design.post_constraints.updated(**changes),
        )
        if design.post_constraints.enabled:
            design = self.apply_post_constraints(design)
        return design

    def toggle_post_constraints(self, design: PatioDesign) -> PatioDesign:
        return self.set_post_constraints(
            design, enabled=not design.post_constraints.enabled,
        )

    def set_cover_type(self, design: PatioDesign, cover_type) -> PatioDesign:
        return replace(design, cover_type=CoverType(cover_type))

    def set_tilt_angle(self, design: PatioDesign, degrees: float) -> PatioDesign:
        if math.isnan(degrees):
            return replace(design, tilt_angle=DEFAULT_TILT_DEG)
        degrees = min(max(degrees, MIN_TILT_DEG), MAX_TILT_DEG)
        angle = int(round(degrees))
        return replace(design, tilt_angle=angle)

    def set_mode(self, design: PatioDesign, mode) -> PatioDesign:
        return replace(design, mode=DesignMode(mode))

    def toggle_mode(self, design: PatioDesign) -> PatioDesign:
        mode = DesignMode.SHADE if design.mode == DesignMode.POST else DesignMode.POST
        return replace(design, mode=mode)

    def clear_all(self, design: PatioDesign) -> PatioDesign:
        return replace(design, posts=(), shade_area=None, mode=DesignMode.POST)

    def reset(self, design: PatioDesign) -> PatioDesign:
        """Clear the plan and restore cover and tilt defaults; constraints stay."""
        return replace(
            self.clear_all(design),
            cover_type=CoverType.LATTICE,
            tilt_angle=DEFAULT_TILT_DEG,
        )

    # ─── Read model ─────────────────────────────────────────────────────────

    def cantilever_span(self, design: PatioDesign) -> float:
        return cantilever_span(design.posts, design.shade_area, self.scale)

    def structural_rating(self, design: PatioDesign) -> StructuralRating:
        return classify_span(self.cantilever_span(design), self.config.limits)

    def required_post_size(self, design: PatioDesign) -> str:
        return self.structural_rating(design).post_size

    def is_structurally_safe(self, design: PatioDesign) -> bool:
        return self.structural_rating(design).is_safe

    def coverage_area(self, design: PatioDesign) -> float:
        return coverage_area(design.shade_area, self.scale)

    def violations(self, design: PatioDesign) -> List[LayoutViolation]:
        return check_layout_violations(
            design.posts, design.shade_area, design.constraints, self.scale,
        )

    def post_spans(self, design: PatioDesign) -> List[PostSpan]:
        return consecutive_spans(
            design.posts, self.scale, design.post_constraints.exact_distance,
        )

    def costs(self, design: PatioDesign) -> CostBreakdown:
        return self.evaluate(design).costs

    def evaluate(self, design: PatioDesign) -> DesignReport:
        """Compute span, sizing, area, violations and costs in one pass."""
        rating = self.structural_rating(design)
        area = self.coverage_area(design)
        violations = self.violations(design)
        costs = compose_cost(
            post_count=len(design.posts),
            post_size=rating.post_size,
            area_sqft=area,
            cover_type=design.cover_type,
            cantilever_span_ft=rating.cantilever_span_ft,
            violation_count=len(violations),
            precision_mode=design.precision_mode,
            prices=self.config.prices,
        )
        report = DesignReport(
            cantilever_span_ft=rating.cantilever_span_ft,
            post_size=rating.post_size,
            is_structurally_safe=rating.is_safe,
            coverage_area_sqft=area,
            post_count=len(design.posts),
            violations=violations,
            costs=costs,
        )
        logger.info(
            "Design: posts=%d size=%s span=%.1fft area=%.1fsqft violations=%d total=$%.2f",
            report.post_count, report.post_size, report.cantilever_span_ft,
            area, len(violations), costs.total,
        )
        return report
