from __future__ import annotations

import math

from pallet_optimizer.metrics import (
    clamp_percent,
    compute_metrics,
    container_utilization,
    pallet_utilization,
    placement_volume,
    total_weight,
    weight_utilization,
)
from pallet_optimizer.models import Container, PalletArrangement, PalletTemplate, Placement, Position

PALLET = PalletTemplate(length=80, width=80, height=15, weight=10)


def make_arrangement(placements: list[Placement], goods_weight: float = 0.0) -> PalletArrangement:
    return PalletArrangement(
        index=0,
        pallet=PALLET,
        position=Position(),
        placements=placements,
        goods_weight=goods_weight,
        weight=PALLET.weight + goods_weight,
        stack_height=85.0,
    )


def run(quantity: int, y: float = 0.0) -> Placement:
    return Placement(
        product_id="cube",
        quantity=quantity,
        position=Position(y=y),
        size=(10.0, 10.0, 10.0),
        unit_weight=1.0,
    )


def test_placement_volume_counts_every_unit() -> None:
    assert placement_volume(run(8)) == 8000.0


def test_container_utilization_percentage() -> None:
    container = Container(length=100, width=100, height=100)
    arrangement = make_arrangement([run(8), run(2, y=10)], goods_weight=10)

    # 10 litres of goods in a 1000 litre container
    assert math.isclose(container_utilization([arrangement], container), 1.0)


def test_pallet_utilization_uses_usable_stack_height() -> None:
    util = pallet_utilization([run(8), run(2, y=10)], PALLET, 85.0)

    assert math.isclose(util, 10000 / (80 * 80 * 85) * 100)


def test_pallet_utilization_with_no_headroom_is_zero() -> None:
    assert pallet_utilization([run(1)], PALLET, 0.0) == 0.0


def test_weight_utilization_includes_tare() -> None:
    container = Container(length=100, width=100, height=100, max_weight=200)
    arrangement = make_arrangement([run(8), run(2, y=10)], goods_weight=10)

    assert total_weight([arrangement]) == 20.0
    assert math.isclose(weight_utilization([arrangement], container), 10.0)


def test_weight_utilization_without_container_limit() -> None:
    container = Container(length=100, width=100, height=100)

    assert weight_utilization([make_arrangement([run(1)], 1.0)], container) is None


def test_empty_plan_metrics() -> None:
    container = Container(length=100, width=100, height=100, max_weight=500)

    assert compute_metrics(container, []) == (0.0, 0.0)


def test_clamp_percent() -> None:
    assert clamp_percent(-1.0) == 0.0
    assert clamp_percent(100.0000001) == 100.0
    assert clamp_percent(42.5) == 42.5
