#!/usr/bin/env python3
"""
Quote a patio-cover design from the command line.

Usage:
    python scripts/quote_design.py --post 0,0 --post 120,0 --shade -20,-20,160,120
    python scripts/quote_design.py --post 0,0 --post 50,0 --post 200,0 \
        --precision --exact-distance 10 --json

Coordinates are plan units (10 per foot by default).
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shade_planner import (
    AlignmentAxis,
    CoverType,
    EngineConfig,
    LayoutEngine,
    PatioDesign,
    PlanScale,
    ShadeRectangle,
)


def _floats(text: str, count: int) -> tuple[float, ...]:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != count:
        raise argparse.ArgumentTypeError(f"expected {count} comma-separated numbers, got {text!r}")
    try:
        return tuple(float(p) for p in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _point(text: str) -> tuple[float, ...]:
    return _floats(text, 2)


def _rect(text: str) -> tuple[float, ...]:
    return _floats(text, 4)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Price a patio-cover layout")
    parser.add_argument("--post", type=_point, action="append", default=[],
                        metavar="X,Y", help="Post position (repeatable, placement order)")
    parser.add_argument("--shade", type=_rect, default=None, metavar="X,Y,W,H",
                        help="Shade rectangle")
    parser.add_argument("--cover", choices=[c.value for c in CoverType],
                        default=CoverType.LATTICE.value)
    parser.add_argument("--tilt", type=float, default=15.0, help="Tilt angle in degrees")
    parser.add_argument("--feet-per-unit", type=float, default=0.1)

    shade = parser.add_argument_group("shade constraints")
    shade.add_argument("--constraints", action="store_true", help="Enable shade constraints")
    shade.add_argument("--min-width", type=float, default=8.0)
    shade.add_argument("--max-width", type=float, default=30.0)
    shade.add_argument("--min-height", type=float, default=8.0)
    shade.add_argument("--max-height", type=float, default=20.0)
    shade.add_argument("--min-spacing", type=float, default=6.0)
    shade.add_argument("--max-spacing", type=float, default=20.0)
    shade.add_argument("--grid", type=float, default=None,
                       help="Snap to a grid of this size in feet")

    precision = parser.add_argument_group("precision placement")
    precision.add_argument("--precision", action="store_true",
                           help="Enable precision post placement")
    precision.add_argument("--exact-distance", type=float, default=6.0)
    precision.add_argument("--align", choices=[a.value for a in AlignmentAxis], default=None)
    precision.add_argument("--relayout", action="store_true",
                           help="Re-lay posts out at uniform spacing, sorted by x")

    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def build_design(engine: LayoutEngine, args: argparse.Namespace) -> PatioDesign:
    design = PatioDesign()
    design = engine.set_constraints(
        design,
        enabled=args.constraints,
        min_width=args.min_width,
        max_width=args.max_width,
        min_height=args.min_height,
        max_height=args.max_height,
        min_post_spacing=args.min_spacing,
        max_post_spacing=args.max_spacing,
        snap_to_grid=args.grid is not None,
        grid_size=args.grid if args.grid is not None else 1.0,
    )
    for x, y in args.post:
        before = len(design.posts)
        design = engine.add_post(design, x, y)
        if len(design.posts) == before:
            print(f"Post at ({x:g}, {y:g}) refused: too close to an existing post", file=sys.stderr)

    if args.precision:
        design = engine.set_post_constraints(
            design,
            enabled=True,
            exact_distance=args.exact_distance,
            parallel_alignment=args.align is not None,
            alignment_axis=AlignmentAxis(args.align or AlignmentAxis.HORIZONTAL.value),
        )
        if args.relayout:
            design = engine.constrain_all_posts(design)

    if args.shade is not None:
        design = engine.set_shade_area(design, ShadeRectangle(*args.shade))
    design = engine.set_cover_type(design, args.cover)
    return engine.set_tilt_angle(design, args.tilt)


def format_report(report) -> str:
    costs = report.costs
    lines = [
        "## Patio Cover Quote",
        f"- Posts: {report.post_count} x {report.post_size}",
        f"- Coverage: {report.coverage_area_sqft:.1f} sq ft",
        f"- Cantilever: {report.cantilever_span_ft:.1f} ft"
        + ("" if report.is_structurally_safe else " (EXCEEDS SAFE LIMIT)"),
        "",
        f"Steel Posts:          ${costs.posts:.2f}",
        f"Cover Material:       ${costs.cover:.2f}",
        f"Hardware:             ${costs.hardware:.2f}",
        f"Installation:         ${costs.installation:.2f}",
    ]
    if costs.engineering > 0:
        lines.append(f"Engineering:          ${costs.engineering:.2f}")
    if costs.constraint_penalty > 0:
        lines.append(f"Design Revision:      ${costs.constraint_penalty:.2f}")
    if costs.precision > 0:
        lines.append(f"Precision Placement:  ${costs.precision:.2f}")
    lines.append(f"Total:                ${costs.total:.2f}")
    if report.violations:
        lines.append("")
        lines.append("Constraint violations:")
        lines.extend(f"- {v.message}" for v in report.violations)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = EngineConfig(scale=PlanScale(feet_per_unit=args.feet_per_unit))
    except ValueError as exc:
        parser.error(str(exc))

    engine = LayoutEngine(config)
    design = build_design(engine, args)
    report = engine.evaluate(design)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(format_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
