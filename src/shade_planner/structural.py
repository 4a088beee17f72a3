"""
Post sizing from cantilever span.

A simplified lookup, not a load calculation: the smallest post size whose
cantilever limit covers the span wins. Spans beyond the largest limit get the
largest size and are flagged unsafe.
"""
import logging
import math

from shade_planner.contracts import StructuralRating
from shade_planner.pricing import CantileverLimits

logger = logging.getLogger(__name__)


def _clean_span(span_ft: float) -> float:
    if math.isnan(span_ft):
        return 0.0
    return span_ft


def required_post_size(span_ft: float, limits: CantileverLimits) -> str:
    span_ft = _clean_span(span_ft)
    for size, limit in limits.entries:
        if span_ft <= limit:
            return size
    return limits.largest[0]


def is_structurally_safe(span_ft: float, limits: CantileverLimits) -> bool:
    return _clean_span(span_ft) <= limits.largest[1]


def classify_span(span_ft: float, limits: CantileverLimits) -> StructuralRating:
    """Post size and safety verdict for a cantilever span. Never raises."""
    span_ft = _clean_span(span_ft)
    rating = StructuralRating(
        cantilever_span_ft=span_ft,
        post_size=required_post_size(span_ft, limits),
        is_safe=is_structurally_safe(span_ft, limits),
    )
    if not rating.is_safe:
        logger.debug(
            "Cantilever %.2fft exceeds %s limit %.1fft",
            span_ft, limits.largest[0], limits.largest[1],
        )
    return rating
