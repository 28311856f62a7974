"""FastAPI endpoints for the pallet optimizer."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pallet_optimizer.config import configure_logging, load_settings
from pallet_optimizer.containers import CONTAINER_PRESETS, PALLET_PRESETS
from pallet_optimizer.engine import optimize as run_optimize
from pallet_optimizer.engine import prepare_summary, validate_products
from pallet_optimizer.io.schemas import (
    OptimizeRequestSchema,
    OptimizeResponseSchema,
    ValidateRequestSchema,
)
from pallet_optimizer.models import OptimizationResult, OptimizationSummary, ValidationResult

logger = logging.getLogger(__name__)

settings = load_settings()
configure_logging(settings.log_level)

# FastAPI app instance (exactly one)
app = FastAPI(
    title="Pallet Optimizer API",
    description="Pallet and container loading for shipment quotes",
)

if settings.cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )


def _friendly_422(error: str, summary: str, details: list[str]) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": error, "summary": summary, "details": details},
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/presets")
def presets() -> dict[str, Any]:
    """Container and pallet presets, in their own units."""
    return {
        "containers": {name: c.model_dump(mode="json") for name, c in CONTAINER_PRESETS.items()},
        "pallets": {name: p.model_dump(mode="json") for name, p in PALLET_PRESETS.items()},
    }


@app.post("/validate", response_model=ValidationResult)
def validate(request: ValidateRequestSchema) -> ValidationResult:
    return validate_products(request.products)


@app.post("/optimize", response_model=OptimizeResponseSchema)
def optimize(
    request: OptimizeRequestSchema,
    summary: int = Query(0, description="Include the condensed summary (1) or not (0)"),
):
    """
    Plan pallets for a shipment.

    Input (request body):
        {
            "products": [
                {"product": {"id": "p1", "name": "Carton", "weight": 18,
                             "dimensions": {"length": 50, "width": 40, "height": 30, "unit": "cm"}},
                 "quantity": 10}
            ],
            "container_preset": "40HC",
            "pallet_preset": "EUR"
        }
    """
    missing_fields = request.missing_fields()
    if missing_fields:
        return _friendly_422(
            "MISSING_INFORMATION",
            "Missing information. Please enter the missing details to run the optimization.",
            missing_fields,
        )

    try:
        container = request.resolve_container()
        pallet = request.resolve_pallet()
    except ValueError as e:
        return _friendly_422("UNKNOWN_PRESET", "Unknown container or pallet preset.", [str(e)])

    try:
        result = run_optimize(request.products, container, pallet, message=request.message)
    except Exception as e:
        logger.error(f"ERROR in /optimize endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(
        f"success={result.success}, status={result.status.value}, "
        f"pallets={len(result.pallet_arrangements)}, utilization={result.utilization:.2f}"
    )
    return OptimizeResponseSchema(
        result=result,
        summary=prepare_summary(result) if summary == 1 else None,
    )


@app.post("/summary", response_model=OptimizationSummary)
def summarize(result: OptimizationResult) -> OptimizationSummary:
    return prepare_summary(result)
