"""
Plan-unit <-> feet conversion.

The plan is drawn in abstract plan units (canvas pixels in the drawing
layer). One scale constant maps them to real-world feet in both directions;
every measurement and constraint comparison goes through the same instance.
"""
from dataclasses import dataclass

DEFAULT_FEET_PER_UNIT = 0.1  # 10 plan units per foot


@dataclass(frozen=True)
class PlanScale:
    """Linear plan-unit to feet mapping."""

    feet_per_unit: float = DEFAULT_FEET_PER_UNIT

    def __post_init__(self):
        if not self.feet_per_unit > 0:
            raise ValueError(
                f"feet_per_unit must be positive, got {self.feet_per_unit!r}"
            )

    @property
    def units_per_foot(self) -> float:
        return 1.0 / self.feet_per_unit

    def to_feet(self, plan_units: float) -> float:
        return plan_units * self.feet_per_unit

    def to_plan(self, feet: float) -> float:
        return feet / self.feet_per_unit
