"""Turn packing output into the result and summary handed back to callers."""

from __future__ import annotations

from typing import Optional

from pallet_optimizer.metrics import compute_metrics
from pallet_optimizer.models import (
    Container,
    OptimizationResult,
    OptimizationStatus,
    OptimizationSummary,
    ProductRequest,
)
from pallet_optimizer.packing.shelf import FitProblem, PackingOutcome

NO_PRODUCTS_MESSAGE = "No products to optimize"
SUCCESS_MESSAGE = "Optimization completed successfully"


def empty_result() -> OptimizationResult:
    return OptimizationResult(
        success=False,
        status=OptimizationStatus.EMPTY_INPUT,
        message=NO_PRODUCTS_MESSAGE,
    )


def invalid_result(requests: list[ProductRequest], invalid_products: list[str]) -> OptimizationResult:
    return OptimizationResult(
        success=False,
        status=OptimizationStatus.INVALID_PRODUCT,
        message=f"Invalid products: {', '.join(invalid_products)}",
        remaining_products=list(requests),
        invalid_products=list(invalid_products),
    )


def oversized_result(requests: list[ProductRequest], problem: FitProblem) -> OptimizationResult:
    subject = problem.label if problem.request is None else f"Product {problem.label}"
    return OptimizationResult(
        success=False,
        status=OptimizationStatus.OVERSIZED,
        message=f"{subject} is too large for the {problem.target}",
        remaining_products=list(requests),
    )


def assemble_result(
    outcome: PackingOutcome,
    container: Container,
    message: Optional[str] = None,
) -> OptimizationResult:
    """
    Build a successful result from a packing outcome.

    A non-empty remainder is still a success (status PARTIAL); callers
    inspect ``remaining_products`` to tell the two apart.
    """
    utilization, weight_utilization = compute_metrics(container, outcome.arrangements)

    if outcome.remaining:
        status = OptimizationStatus.PARTIAL
        default_message = (
            f"Optimization completed: {outcome.remaining_units} unit(s) could not be placed"
        )
    else:
        status = OptimizationStatus.SUCCESS
        default_message = SUCCESS_MESSAGE

    return OptimizationResult(
        success=True,
        status=status,
        message=message or default_message,
        utilization=utilization,
        weight_utilization=weight_utilization,
        pallet_arrangements=outcome.arrangements,
        remaining_products=outcome.remaining,
    )


def prepare_summary(result: OptimizationResult) -> OptimizationSummary:
    """
    Condensed, display-ready view of a result.

    Figures are only meaningful for successful results; check ``success``
    before showing pallet or weight numbers.
    """
    return OptimizationSummary(
        success=result.success,
        utilization=round(result.utilization, 2),
        total_pallets=len(result.pallet_arrangements),
        total_products=sum(a.units for a in result.pallet_arrangements),
        remaining_products=sum(r.quantity for r in result.remaining_products),
        weight_utilization=(
            round(result.weight_utilization, 2) if result.weight_utilization is not None else None
        ),
        message=result.message,
    )
