"""Input checks run before any packing."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from pallet_optimizer.models import (
    LENGTH_UNITS,
    WEIGHT_UNITS,
    Dimensions,
    Product,
    ProductRequest,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def product_identifier(product: Product) -> str:
    """Readable label for a product: name, then sku, then id."""
    return product.name or product.sku or product.id or "Unknown product"


def _positive(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def dimensions_problem(dims: Optional[Dimensions]) -> Optional[str]:
    if dims is None:
        return "missing dimensions"
    if dims.unit not in LENGTH_UNITS:
        return f"unknown unit '{dims.unit}'"
    if not all(_positive(v) for v in (dims.length, dims.width, dims.height)):
        return "dimensions must be finite and greater than zero"
    return None


def request_problems(request: ProductRequest) -> list[str]:
    """All reasons a single request cannot be packed (empty when it can)."""
    product = request.product
    problems: list[str] = []

    dims_problem = dimensions_problem(product.dimensions)
    if dims_problem:
        problems.append(dims_problem)

    weight = product.weight
    if weight is None:
        problems.append("missing weight")
    elif not math.isfinite(weight) or weight < 0:
        problems.append("weight must be zero or greater")
    if product.weight_unit not in WEIGHT_UNITS:
        problems.append(f"unknown weight unit '{product.weight_unit}'")

    if request.quantity < 0:
        problems.append("quantity must be zero or greater")

    if product.units_per_pallet is not None and product.units_per_pallet <= 0:
        problems.append("units_per_pallet must be greater than zero")

    return problems


def validate_products(requests: Iterable[ProductRequest]) -> ValidationResult:
    """
    Check every request and report all invalid products at once.

    Returns:
        ValidationResult with valid=False and the identifiers of the
        offending products if any request fails a check.
    """
    invalid: list[str] = []
    for request in requests:
        problems = request_problems(request)
        if problems:
            label = product_identifier(request.product)
            logger.debug(f"invalid product {label}: {'; '.join(problems)}")
            invalid.append(label)

    return ValidationResult(valid=not invalid, invalid_products=invalid)


def has_products(requests: Iterable[ProductRequest]) -> bool:
    """True when at least one request asks for a positive quantity."""
    return any(r.quantity > 0 for r in requests)
