"""Data schemas for input/output operations."""

from typing import List, Optional

from pydantic import BaseModel, Field

from pallet_optimizer.containers import DEFAULT_PALLET, get_container, get_pallet
from pallet_optimizer.models import (
    Container,
    OptimizationResult,
    OptimizationSummary,
    PalletTemplate,
    ProductRequest,
)


class ValidateRequestSchema(BaseModel):
    """Schema for a validation request."""
    products: List[ProductRequest] = Field(default_factory=list, description="Products with quantities")


class OptimizeRequestSchema(BaseModel):
    """Schema for an optimization request.

    The container and pallet can each be given explicitly or by preset name;
    an explicit value wins over a preset.
    """
    products: List[ProductRequest] = Field(default_factory=list, description="Products with quantities")
    container: Optional[Container] = Field(None, description="Explicit container")
    container_preset: Optional[str] = Field(None, description="Container preset, e.g. 40HC")
    pallet: Optional[PalletTemplate] = Field(None, description="Explicit pallet template")
    pallet_preset: Optional[str] = Field(None, description="Pallet preset, e.g. EUR")
    message: Optional[str] = Field(None, description="Message to report on success")

    def missing_fields(self) -> List[str]:
        missing = []
        if self.container is None and not self.container_preset:
            missing.append("Container size (length, width, height) or container_preset")
        return missing

    def resolve_container(self) -> Container:
        if self.container is not None:
            return self.container
        if self.container_preset:
            return get_container(self.container_preset)
        raise ValueError("request must include either 'container' or 'container_preset'")

    def resolve_pallet(self) -> PalletTemplate:
        if self.pallet is not None:
            return self.pallet
        if self.pallet_preset:
            return get_pallet(self.pallet_preset)
        return DEFAULT_PALLET


class OptimizeResponseSchema(BaseModel):
    """Schema for an optimization response."""
    result: OptimizationResult
    summary: Optional[OptimizationSummary] = None
