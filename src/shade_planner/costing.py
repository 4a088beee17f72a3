"""
Itemized patio-cover pricing.

Purely additive: posts, cover material, hardware, installation, plus the
engineering, design-revision and precision-placement surcharges. No
discounts, no negative line items.
"""
import logging

from shade_planner.contracts import CostBreakdown, CoverType
from shade_planner.pricing import PriceSheet

logger = logging.getLogger(__name__)


def compose_cost(
    post_count: int,
    post_size: str,
    area_sqft: float,
    cover_type: CoverType,
    cantilever_span_ft: float,
    violation_count: int,
    precision_mode: bool,
    prices: PriceSheet,
) -> CostBreakdown:
    """Price a design from its measured quantities.

    Args:
        post_count: Number of posts.
        post_size: Structural category from the classifier ("4x4", ...).
        area_sqft: Coverage area.
        cover_type: Cover material.
        cantilever_span_ft: Engineering review above the price sheet threshold.
        violation_count: Number of reported constraint violations.
        precision_mode: Whether precision post placement is switched on.
        prices: Unit prices and fees.
    """
    count = max(int(post_count), 0)
    area = max(float(area_sqft), 0.0)

    breakdown = CostBreakdown(
        posts=count * prices.post_price(post_size),
        cover=area * prices.cover_rate(cover_type),
        hardware=prices.hardware_base + count * prices.hardware_per_post,
        installation=area * prices.installation_per_sqft,
        engineering=(
            prices.engineering_fee
            if cantilever_span_ft > prices.engineering_span_threshold_ft
            else 0.0
        ),
        constraint_penalty=prices.constraint_penalty if violation_count > 0 else 0.0,
        precision=prices.precision_fee if precision_mode else 0.0,
    )
    logger.debug(
        "Cost: posts=%d (%s) area=%.1fsqft total=$%.2f",
        count, post_size, area, breakdown.total,
    )
    return breakdown
