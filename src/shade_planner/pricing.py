"""
Price sheet and structural lookup table for patio covers.

Steel post prices by size, cover material rates per square foot, and the
fixed fees applied by the cost composer. Also the cantilever limit table
used by the structural classifier.
"""
from dataclasses import dataclass, field
from typing import Mapping, Tuple

from shade_planner.contracts import CoverType
from shade_planner.units import PlanScale


@dataclass(frozen=True)
class CantileverLimits:
    """Ordered (post size, max safe cantilever in feet), smallest first."""

    entries: Tuple[Tuple[str, float], ...] = (
        ("4x4", 8.0),
        ("6x6", 12.0),
        ("8x8", 16.0),
    )

    def __post_init__(self):
        if not self.entries:
            raise ValueError("CantileverLimits needs at least one post size")
        limits = [limit for _, limit in self.entries]
        if any(b <= a for a, b in zip(limits, limits[1:])):
            raise ValueError(f"Cantilever limits must strictly increase: {limits}")

    @property
    def sizes(self) -> Tuple[str, ...]:
        return tuple(size for size, _ in self.entries)

    @property
    def smallest(self) -> Tuple[str, float]:
        return self.entries[0]

    @property
    def largest(self) -> Tuple[str, float]:
        return self.entries[-1]

    def limit_for(self, post_size: str) -> float:
        for size, limit in self.entries:
            if size == post_size:
                return limit
        raise KeyError(post_size)


@dataclass(frozen=True)
class PriceSheet:
    """Unit prices (USD).

    Price tables are stored as tuples of (key, amount) pairs so the sheet
    stays immutable and hashable; a mapping passed in is converted.
    """

    post_prices: Tuple[Tuple[str, float], ...] = (
        ("4x4", 150.0),
        ("6x6", 250.0),
        ("8x8", 380.0),
    )
    cover_rates_per_sqft: Tuple[Tuple[CoverType, float], ...] = (
        (CoverType.LATTICE, 12.0),
        (CoverType.SOLID_PANEL, 18.0),  # aluminum solid panel
    )
    hardware_base: float = 75.0
    hardware_per_post: float = 25.0
    installation_per_sqft: float = 8.0
    engineering_fee: float = 500.0
    engineering_span_threshold_ft: float = 10.0
    constraint_penalty: float = 200.0  # design revision
    precision_fee: float = 150.0

    def __post_init__(self):
        object.__setattr__(self, "post_prices", _pairs(self.post_prices))
        object.__setattr__(
            self, "cover_rates_per_sqft",
            tuple((CoverType(k), v) for k, v in _pairs(self.cover_rates_per_sqft)),
        )
        amounts = [
            *(v for _, v in self.post_prices),
            *(v for _, v in self.cover_rates_per_sqft),
            self.hardware_base,
            self.hardware_per_post,
            self.installation_per_sqft,
            self.engineering_fee,
            self.constraint_penalty,
            self.precision_fee,
        ]
        if any(a < 0 for a in amounts):
            raise ValueError("PriceSheet amounts must be non-negative")

    @property
    def priced_sizes(self) -> Tuple[str, ...]:
        return tuple(size for size, _ in self.post_prices)

    def post_price(self, post_size: str) -> float:
        for size, price in self.post_prices:
            if size == post_size:
                return price
        raise KeyError(post_size)

    def cover_rate(self, cover_type: CoverType) -> float:
        return dict(self.cover_rates_per_sqft).get(CoverType(cover_type), 0.0)


def _pairs(table) -> Tuple[Tuple, ...]:
    items = table.items() if isinstance(table, Mapping) else table
    return tuple((key, float(amount)) for key, amount in items)


@dataclass(frozen=True)
class EngineConfig:
    """Everything the layout engine needs besides the design itself."""

    scale: PlanScale = field(default_factory=PlanScale)
    limits: CantileverLimits = field(default_factory=CantileverLimits)
    prices: PriceSheet = field(default_factory=PriceSheet)

    def __post_init__(self):
        unpriced = [s for s in self.limits.sizes if s not in self.prices.priced_sizes]
        if unpriced:
            raise ValueError(f"No post price for cantilever sizes: {unpriced}")
