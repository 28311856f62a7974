from __future__ import annotations

from typing import Iterable, Optional

from pallet_optimizer.models import Container, PalletArrangement, PalletTemplate, Placement


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def placement_volume(p: Placement) -> float:
    L, W, H = p.size  # size is the oriented (L, W, H)
    return float(L) * float(W) * float(H) * p.quantity


def placement_weight(p: Placement) -> float:
    return p.unit_weight * p.quantity


def placed_volume(arrangements: Iterable[PalletArrangement]) -> float:
    return sum(placement_volume(p) for a in arrangements for p in a.placements)


def container_utilization(arrangements: Iterable[PalletArrangement], container: Container) -> float:
    """Placed unit volume as a percentage of the container volume."""
    container_volume = float(container.volume)
    if container_volume == 0.0:
        return 0.0
    return clamp_percent(placed_volume(arrangements) / container_volume * 100.0)


def pallet_utilization(
    placements: Iterable[Placement],
    pallet: PalletTemplate,
    stack_height: float,
) -> float:
    """Placed unit volume as a percentage of footprint x usable stack height."""
    available = float(pallet.footprint) * float(stack_height)
    if available <= 0.0:
        return 0.0
    used = sum(placement_volume(p) for p in placements)
    return clamp_percent(used / available * 100.0)


def total_weight(arrangements: Iterable[PalletArrangement]) -> float:
    """Goods plus pallet tares."""
    return sum(a.weight for a in arrangements)


def weight_utilization(
    arrangements: Iterable[PalletArrangement],
    container: Container,
) -> Optional[float]:
    """Total weight as a percentage of container max_weight; None when unset."""
    if container.max_weight is None:
        return None
    return clamp_percent(total_weight(arrangements) / float(container.max_weight) * 100.0)


def compute_metrics(
    container: Container,
    arrangements: list[PalletArrangement],
) -> tuple[float, Optional[float]]:
    return container_utilization(arrangements, container), weight_utilization(arrangements, container)
