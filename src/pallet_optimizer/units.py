"""Conversion of lengths and weights to the canonical units (cm, kg)."""

from __future__ import annotations

from typing import Iterable

from pallet_optimizer.models import Container, Dimensions, PalletTemplate, Product, ProductRequest

CANONICAL_LENGTH_UNIT = "cm"
CANONICAL_WEIGHT_UNIT = "kg"

# Multiply by the factor to get centimeters / kilograms.
LENGTH_FACTORS: dict[str, float] = {
    "cm": 1.0,
    "mm": 0.1,
    "in": 2.54,
}
WEIGHT_FACTORS: dict[str, float] = {
    "kg": 1.0,
    "lb": 0.45359237,
}


def to_centimeters(value: float, unit: str) -> float:
    return float(value) * LENGTH_FACTORS[unit]


def to_kilograms(value: float, unit: str) -> float:
    return float(value) * WEIGHT_FACTORS[unit]


def normalize_dimensions(dims: Dimensions) -> Dimensions:
    if dims.unit == CANONICAL_LENGTH_UNIT:
        return dims
    return Dimensions(
        length=to_centimeters(dims.length, dims.unit),
        width=to_centimeters(dims.width, dims.unit),
        height=to_centimeters(dims.height, dims.unit),
        unit=CANONICAL_LENGTH_UNIT,
    )


def normalize_product(product: Product) -> Product:
    """
    Return a copy of ``product`` with dimensions in cm and weight in kg.

    Only called on products that passed validation, so dimensions and weight
    are present and their units are known.
    """
    return product.model_copy(
        update={
            "dimensions": normalize_dimensions(product.dimensions),
            "weight": to_kilograms(product.weight, product.weight_unit),
            "weight_unit": CANONICAL_WEIGHT_UNIT,
        }
    )


def normalize_container(container: Container) -> Container:
    return Container(
        length=to_centimeters(container.length, container.unit),
        width=to_centimeters(container.width, container.unit),
        height=to_centimeters(container.height, container.unit),
        unit=CANONICAL_LENGTH_UNIT,
        max_weight=(
            to_kilograms(container.max_weight, container.weight_unit)
            if container.max_weight is not None
            else None
        ),
        weight_unit=CANONICAL_WEIGHT_UNIT,
    )


def normalize_pallet(pallet: PalletTemplate) -> PalletTemplate:
    return PalletTemplate(
        length=to_centimeters(pallet.length, pallet.unit),
        width=to_centimeters(pallet.width, pallet.unit),
        height=to_centimeters(pallet.height, pallet.unit),
        unit=CANONICAL_LENGTH_UNIT,
        weight=to_kilograms(pallet.weight, pallet.weight_unit),
        max_weight=(
            to_kilograms(pallet.max_weight, pallet.weight_unit)
            if pallet.max_weight is not None
            else None
        ),
        weight_unit=CANONICAL_WEIGHT_UNIT,
    )


def normalize_requests(requests: Iterable[ProductRequest]) -> list[tuple[ProductRequest, Product]]:
    """Pair each caller request with its product converted to cm/kg."""
    return [(request, normalize_product(request.product)) for request in requests]
