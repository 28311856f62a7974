"""Public entry points: validate_products, optimize, prepare_summary."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pallet_optimizer.cache import OptimizationCache, cache_key, default_cache
from pallet_optimizer.containers import DEFAULT_PALLET
from pallet_optimizer.models import Container, OptimizationResult, PalletTemplate, ProductRequest
from pallet_optimizer.packing.shelf import check_fit, pack_pallets
from pallet_optimizer.results import (
    assemble_result,
    empty_result,
    invalid_result,
    oversized_result,
    prepare_summary,
)
from pallet_optimizer.units import normalize_container, normalize_pallet, normalize_requests
from pallet_optimizer.validation import has_products, validate_products

logger = logging.getLogger(__name__)

__all__ = ["optimize", "prepare_summary", "validate_products"]


def _run_pipeline(
    requests: list[ProductRequest],
    container: Container,
    pallet: PalletTemplate,
) -> OptimizationResult:
    items = normalize_requests(requests)
    problem = check_fit(items, container, pallet)
    if problem is not None:
        logger.info(f"optimize rejected: {problem.label} too large for the {problem.target}")
        return oversized_result(requests, problem)

    outcome = pack_pallets(items, container, pallet)
    result = assemble_result(outcome, container)
    logger.info(
        f"pallets={len(outcome.arrangements)}/{outcome.pallet_capacity}, "
        f"placed_units={outcome.placed_units}, remaining_units={outcome.remaining_units}, "
        f"utilization={result.utilization:.2f}"
    )
    return result


def optimize(
    requests: Iterable[ProductRequest],
    container: Container,
    pallet: PalletTemplate = DEFAULT_PALLET,
    *,
    message: Optional[str] = None,
    cache: Optional[OptimizationCache] = None,
    use_cache: bool = True,
) -> OptimizationResult:
    """
    Plan pallets for a shipment and report how well they fill the container.

    Input problems (nothing to pack, invalid products, oversized products)
    come back as ``success=False`` with a readable message. A shipment that
    only partly fits is a success with a non-empty ``remaining_products``.

    Args:
        requests: Products with quantities; zero-quantity entries are ignored
        container: Target container
        pallet: Pallet template to load (defaults to DEFAULT_PALLET)
        message: Replaces the default message on success
        cache: Cache to use instead of the process-wide default
        use_cache: Set False to always recompute

    Raises:
        ValueError: container or pallet is None
    """
    if container is None:
        raise ValueError("optimize() requires a container")
    if pallet is None:
        raise ValueError("optimize() requires a pallet template")

    requests = list(requests)
    # Negative quantities skip the empty check so validation names them.
    if not has_products(requests) and all(r.quantity >= 0 for r in requests):
        return empty_result()

    active = [r for r in requests if r.quantity != 0]

    validation = validate_products(active)
    if not validation.valid:
        logger.info(f"optimize rejected: invalid products {validation.invalid_products}")
        return invalid_result(active, validation.invalid_products)

    container = normalize_container(container)
    pallet = normalize_pallet(pallet)

    store = cache if cache is not None else default_cache
    key = None
    result = None
    if use_cache:
        key = cache_key(normalize_requests(active), container, pallet)
        result = store.get(key)
        if result is not None:
            logger.debug(f"cache hit {key[:12]}")

    if result is None:
        result = _run_pipeline(active, container, pallet)
        if key is not None:
            store.put(key, result)

    if message and result.success:
        result = result.model_copy(update={"message": message})
    return result
