"""Weight constraints applied while loading pallets."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..geometry import EPSILON


class Constraint:
    """Base class for load constraints."""

    def max_units(self, unit_weight: float) -> Optional[int]:
        """
        How many more units of the given weight the constraint allows.

        Returns:
            A non-negative count, or None when the constraint does not limit
            the count.
        """
        raise NotImplementedError

    def add(self, weight: float) -> None:
        raise NotImplementedError


class WeightConstraint(Constraint):
    """Running weight total that must not exceed ``max_weight``."""

    def __init__(self, max_weight: Optional[float], used: float = 0.0):
        self.max_weight = max_weight
        self.used = used

    @property
    def remaining(self) -> float:
        if self.max_weight is None:
            return math.inf
        return self.max_weight - self.used

    def allows(self, weight: float) -> bool:
        return weight <= self.remaining + EPSILON

    def max_units(self, unit_weight: float) -> Optional[int]:
        if self.max_weight is None or unit_weight <= 0:
            return None
        return max(0, math.floor((self.remaining + EPSILON) / unit_weight))

    def add(self, weight: float) -> None:
        self.used += weight


class PalletWeightConstraint(WeightConstraint):
    """Goods on one pallet against the template's max_weight (tare excluded)."""


class ContainerWeightConstraint(WeightConstraint):
    """Tares plus goods across every pallet against the container's max_weight."""


def allowed_units(constraints: Iterable[Constraint], unit_weight: float, wanted: int) -> int:
    """The largest count up to ``wanted`` that every constraint accepts."""
    allowed = wanted
    for constraint in constraints:
        limit = constraint.max_units(unit_weight)
        if limit is not None:
            allowed = min(allowed, limit)
    return max(0, allowed)
