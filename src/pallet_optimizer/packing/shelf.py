# src/pallet_optimizer/packing/shelf.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from pallet_optimizer.geometry import (
    EPSILON,
    Size,
    as_size,
    count_along,
    fits_within,
    pallet_columns,
    yaw_orientations,
)
from pallet_optimizer.metrics import pallet_utilization
from pallet_optimizer.models import (
    Container,
    PalletArrangement,
    PalletTemplate,
    Placement,
    Position,
    Product,
    ProductRequest,
    Rotation,
)
from pallet_optimizer.packing.constraints import (
    ContainerWeightConstraint,
    PalletWeightConstraint,
    allowed_units,
)
from pallet_optimizer.validation import product_identifier

logger = logging.getLogger(__name__)

# (caller's request, same product normalized to cm/kg)
LoadItem = tuple[ProductRequest, Product]


@dataclass(frozen=True)
class FitProblem:
    """Why a shipment cannot be packed at all."""

    target: str  # "container" or "pallet"
    label: str
    request: Optional[ProductRequest] = None


@dataclass
class PackingOutcome:
    arrangements: list[PalletArrangement] = field(default_factory=list)
    remaining: list[ProductRequest] = field(default_factory=list)
    pallet_capacity: int = 0

    @property
    def placed_units(self) -> int:
        return sum(a.units for a in self.arrangements)

    @property
    def remaining_units(self) -> int:
        return sum(r.quantity for r in self.remaining)


@dataclass
class _Demand:
    request: ProductRequest
    product: Product
    remaining: int


def unit_volume(product: Product) -> float:
    return float(product.dimensions.volume)


def packing_order(items: Iterable[LoadItem]) -> list[LoadItem]:
    """
    Best-fit-decreasing order: biggest units first, heavier first on equal
    volume, then shorter first. Identity fields break the remaining ties so
    the order never depends on how the caller listed the requests.
    """
    def key(item: LoadItem):
        request, product = item
        return (
            -unit_volume(product),
            -float(product.weight),
            float(product.dimensions.height),
            product.id,
            product.sku or "",
            product.name or "",
            request.quantity,
        )

    return sorted(items, key=key)


def check_fit(
    items: Iterable[LoadItem],
    container: Container,
    pallet: PalletTemplate,
) -> Optional[FitProblem]:
    """
    Find the first product that cannot be placed in any allowed orientation.

    A product is too large for the container when no orientation fits the
    container envelope, and too large for the pallet when no orientation fits
    the deck footprint below the ceiling. Returns None when everything fits.
    """
    columns, _ = pallet_columns(container, pallet)
    if not columns:
        return FitProblem(target="container", label="Pallet template")

    envelope = as_size(container.dimensions)
    deck = (float(pallet.length), float(pallet.width), float(container.height - pallet.height))

    for request, product in packing_order(items):
        orientations = [size for size, _ in yaw_orientations(product.dimensions)]
        if not any(fits_within(size, envelope) for size in orientations):
            return FitProblem(target="container", label=product_identifier(request.product), request=request)
        if not any(fits_within(size, deck) for size in orientations):
            return FitProblem(target="pallet", label=product_identifier(request.product), request=request)
    return None


@dataclass
class Shelf:
    """
    Row/layer cursor over one pallet deck.

    Units advance along x; a full row moves y by the deepest unit in the row;
    a full layer moves z by the tallest unit in the layer.
    """

    length: float
    width: float
    headroom: float
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    row_depth: float = 0.0
    layer_height: float = 0.0

    @property
    def used_height(self) -> float:
        return self.z + self.layer_height

    def _cursors(self):
        # (x, y, z, row_depth, layer_height): current row, next row, next layer
        yield self.x, self.y, self.z, self.row_depth, self.layer_height
        if self.row_depth > 0:
            yield 0.0, self.y + self.row_depth, self.z, 0.0, self.layer_height
        if self.layer_height > 0:
            yield 0.0, 0.0, self.z + self.layer_height, 0.0, 0.0

    def place_run(self, size: Size, limit: int) -> Optional[tuple[Position, int]]:
        """Place up to ``limit`` units in one row; None when not even one fits."""
        L, W, H = size
        for x, y, z, row_depth, layer_height in self._cursors():
            if y + W > self.width + EPSILON or z + H > self.headroom + EPSILON:
                continue
            count = min(limit, count_along(self.length - x, L))
            if count <= 0:
                continue
            self.x, self.y, self.z = x + count * L, y, z
            self.row_depth = max(row_depth, W)
            self.layer_height = max(layer_height, H)
            return Position(x=x, y=y, z=z), count
        return None


def choose_orientation(product: Product, shelf: Shelf) -> Optional[tuple[Size, float]]:
    """The allowed orientation with the most units per layer on the deck."""
    best = None
    best_count = -1
    for size, yaw in yaw_orientations(product.dimensions):
        if not fits_within(size, (shelf.length, shelf.width, shelf.headroom)):
            continue
        per_layer = count_along(shelf.length, size[0]) * count_along(shelf.width, size[1])
        if per_layer > best_count:
            best, best_count = (size, yaw), per_layer
    return best


def _load_pallet(
    demands: list[_Demand],
    pallet: PalletTemplate,
    headroom: float,
    container_weight: ContainerWeightConstraint,
) -> tuple[list[Placement], float, float]:
    shelf = Shelf(length=float(pallet.length), width=float(pallet.width), headroom=headroom)
    pallet_weight = PalletWeightConstraint(pallet.max_weight)
    placements: list[Placement] = []

    for demand in demands:
        if demand.remaining == 0:
            continue
        orientation = choose_orientation(demand.product, shelf)
        if orientation is None:
            continue
        size, yaw = orientation
        unit_weight = float(demand.product.weight)
        cap = demand.product.units_per_pallet
        on_pallet = 0

        while demand.remaining > 0:
            wanted = demand.remaining if cap is None else min(demand.remaining, cap - on_pallet)
            limit = allowed_units((pallet_weight, container_weight), unit_weight, wanted)
            if limit <= 0:
                break
            run = shelf.place_run(size, limit)
            if run is None:
                break
            position, count = run
            placements.append(
                Placement(
                    product_id=demand.product.id,
                    quantity=count,
                    position=position,
                    rotation=Rotation(z=yaw),
                    size=size,
                    unit_weight=unit_weight,
                )
            )
            pallet_weight.add(count * unit_weight)
            container_weight.add(count * unit_weight)
            demand.remaining -= count
            on_pallet += count

    return placements, pallet_weight.used, shelf.used_height


def pack_pallets(
    items: Iterable[LoadItem],
    container: Container,
    pallet: PalletTemplate,
) -> PackingOutcome:
    """
    Shelf packer that fills pallets one at a time.

    - Products are taken biggest first (see ``packing_order``)
    - Pallets stand in floor columns; each column stacks pallets upward
      until the container ceiling
    - Whatever one pallet cannot take spills to the next slot
    - A pallet that receives nothing is dropped, tare included
    - Deterministic (no randomness)

    Expects validated items and a container and pallet already in cm/kg.
    """
    demands = [_Demand(request=r, product=p, remaining=r.quantity) for r, p in packing_order(items)]
    columns, rotated = pallet_columns(container, pallet)
    per_column = count_along(float(container.height), float(pallet.height))
    outcome = PackingOutcome(pallet_capacity=len(columns) * per_column)
    pallet_rotation = Rotation(z=90.0) if rotated else Rotation()
    container_weight = ContainerWeightConstraint(container.max_weight)

    logger.debug(
        f"pack_pallets: {len(demands)} products, {len(columns)} columns x {per_column} high, "
        f"pallet rotated={rotated}"
    )

    def done() -> bool:
        return all(d.remaining == 0 for d in demands)

    exhausted = False
    for col_x, col_y in columns:
        if exhausted or done():
            break
        base = 0.0
        while not done() and base + pallet.height <= container.height + EPSILON:
            if not container_weight.allows(pallet.weight):
                exhausted = True
                break
            container_weight.add(pallet.weight)

            headroom = max(0.0, float(container.height) - base - float(pallet.height))
            placements, goods_weight, load_height = _load_pallet(demands, pallet, headroom, container_weight)

            if not placements:
                container_weight.add(-pallet.weight)
                # A fresh floor pallet takes nothing: no other slot will either.
                exhausted = base == 0.0
                break

            outcome.arrangements.append(
                PalletArrangement(
                    index=len(outcome.arrangements),
                    pallet=pallet,
                    position=Position(x=col_x, y=col_y, z=base),
                    rotation=pallet_rotation,
                    placements=placements,
                    goods_weight=goods_weight,
                    weight=float(pallet.weight) + goods_weight,
                    stack_height=headroom,
                    load_height=load_height,
                    utilization=pallet_utilization(placements, pallet, headroom),
                )
            )
            logger.debug(
                f"pallet {len(outcome.arrangements) - 1} at ({col_x}, {col_y}, {base}): "
                f"{sum(p.quantity for p in placements)} units, {goods_weight:.2f} kg"
            )
            base += float(pallet.height) + load_height

    outcome.remaining = [
        ProductRequest(product=d.request.product, quantity=d.remaining)
        for d in demands
        if d.remaining > 0
    ]
    return outcome
