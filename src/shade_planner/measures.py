"""
Geometric measurements of a patio-cover design.

Cantilever span (how far posts sit outside the cover), coverage area, and
post-to-post distances. All results are in feet; inputs are plan units.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from shapely.geometry import Point, box
from shapely.ops import nearest_points

from shade_planner.contracts import Post, ShadeRectangle, Vec2
from shade_planner.units import PlanScale

# Precision-mode distance labels count as on-target within this many feet.
SPAN_MATCH_TOLERANCE_FT = 0.1


@dataclass(frozen=True)
class PostSpan:
    """Distance between two consecutive posts (sequence order)."""

    index_a: int
    index_b: int
    distance_ft: float
    on_target: bool


def _post_array(posts: Sequence[Post]) -> np.ndarray:
    return np.array([[p.x, p.y] for p in posts], dtype=float).reshape(-1, 2)


def post_overhangs(posts: Sequence[Post], rect: ShadeRectangle) -> np.ndarray:
    """Per-post overhang in plan units.

    For each axis independently, the distance the post lies past the near
    edge (0 when within that axis's extent); the post's overhang is the
    larger of the two axis components.
    """
    pts = _post_array(posts)
    if len(pts) == 0:
        return np.zeros(0)
    minx, miny, maxx, maxy = rect.bounds
    dx = np.maximum.reduce([minx - pts[:, 0], pts[:, 0] - maxx, np.zeros(len(pts))])
    dy = np.maximum.reduce([miny - pts[:, 1], pts[:, 1] - maxy, np.zeros(len(pts))])
    return np.maximum(dx, dy)


def cantilever_span(
    posts: Sequence[Post],
    rect: Optional[ShadeRectangle],
    scale: PlanScale,
) -> float:
    """Largest post overhang in feet; 0 with fewer than 2 posts or no cover."""
    if rect is None or len(posts) < 2:
        return 0.0
    return scale.to_feet(float(post_overhangs(posts, rect).max()))


def coverage_area(rect: Optional[ShadeRectangle], scale: PlanScale) -> float:
    """Shade area in square feet (0 without a rectangle)."""
    if rect is None:
        return 0.0
    width_ft = scale.to_feet(max(rect.width, 0.0))
    height_ft = scale.to_feet(max(rect.height, 0.0))
    return width_ft * height_ft


def nearest_cover_point(post: Post, rect: ShadeRectangle) -> Vec2:
    """Closest point of the cover region to a post (the post itself if inside).

    Used as the far end of the overhang guide line.
    """
    region = box(*rect.bounds)
    if region.is_empty or region.area == 0.0:
        # Degenerate rectangle: clamp onto its extent directly.
        return (
            min(max(post.x, rect.x), rect.right),
            min(max(post.y, rect.y), rect.bottom),
        )
    _, nearest = nearest_points(Point(post.x, post.y), region)
    return (nearest.x, nearest.y)


def distance_ft(a: Post, b: Post, scale: PlanScale) -> float:
    return scale.to_feet(float(np.hypot(b.x - a.x, b.y - a.y)))


def pairwise_distances_ft(posts: Sequence[Post], scale: PlanScale) -> np.ndarray:
    """Symmetric (n, n) matrix of post-to-post distances in feet."""
    pts = _post_array(posts)
    diff = pts[:, None, :] - pts[None, :, :]
    return np.hypot(diff[..., 0], diff[..., 1]) * scale.feet_per_unit


def consecutive_spans(
    posts: Sequence[Post],
    scale: PlanScale,
    exact_distance_ft: float,
) -> List[PostSpan]:
    """Distance of each consecutive pair, flagged against the exact target."""
    spans = []
    for i in range(len(posts) - 1):
        d = distance_ft(posts[i], posts[i + 1], scale)
        spans.append(PostSpan(
            index_a=i,
            index_b=i + 1,
            distance_ft=d,
            on_target=abs(d - exact_distance_ft) <= SPAN_MATCH_TOLERANCE_FT,
        ))
    return spans
