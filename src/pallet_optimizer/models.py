from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

LENGTH_UNITS = ("cm", "mm", "in")
WEIGHT_UNITS = ("kg", "lb")


def _check_length_unit(value: str) -> str:
    if value not in LENGTH_UNITS:
        raise ValueError(f"Unknown length unit '{value}'. Valid: {list(LENGTH_UNITS)}")
    return value


def _check_weight_unit(value: str) -> str:
    if value not in WEIGHT_UNITS:
        raise ValueError(f"Unknown weight unit '{value}'. Valid: {list(WEIGHT_UNITS)}")
    return value


class Dimensions(BaseModel):
    """Length/width/height triple tagged with its unit.

    Values are not range-checked here: a product with a zero or negative side
    is reported by ``validate_products`` so the caller can name it.
    """

    model_config = ConfigDict(frozen=True)

    length: float = Field(description="Length along the x axis")
    width: float = Field(description="Width along the y axis")
    height: float = Field(description="Height along the z axis")
    unit: str = Field(default="cm", description="One of cm, mm, in")

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


class Product(BaseModel):
    """Catalog product as supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique identifier for the product")
    name: Optional[str] = Field(default=None, description="Display name")
    sku: Optional[str] = Field(default=None, description="Stock keeping unit")
    description: Optional[str] = None
    dimensions: Optional[Dimensions] = Field(default=None, description="Unit dimensions")
    weight: Optional[float] = Field(default=None, description="Unit weight")
    weight_unit: str = Field(default="kg", description="One of kg, lb")
    units_per_pallet: Optional[int] = Field(
        default=None,
        description="Maximum units of this product on a single pallet")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductRequest(BaseModel):
    """A product and how many units of it should ship."""

    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(description="Requested units")


class Container(BaseModel):
    """Container model with interior dimensions."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(gt=0, description="Interior length of the container")
    width: float = Field(gt=0, description="Interior width of the container")
    height: float = Field(gt=0, description="Interior height of the container")
    unit: str = Field(default="cm", description="One of cm, mm, in")
    max_weight: Optional[float] = Field(
        default=None,
        gt=0,
        description="Maximum total weight: pallet tares plus goods")
    weight_unit: str = Field(default="kg", description="One of kg, lb")

    @field_validator("unit")
    @classmethod
    def check_unit(cls, value: str) -> str:
        return _check_length_unit(value)

    @field_validator("weight_unit")
    @classmethod
    def check_weight_unit(cls, value: str) -> str:
        return _check_weight_unit(value)

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(length=self.length, width=self.width, height=self.height, unit=self.unit)

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


class PalletTemplate(BaseModel):
    """Pallet type; the optimizer may use any number of pallets of this template."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(gt=0, description="Deck length")
    width: float = Field(gt=0, description="Deck width")
    height: float = Field(gt=0, description="Deck height")
    unit: str = Field(default="cm", description="One of cm, mm, in")
    weight: float = Field(default=0.0, ge=0, description="Tare weight of the empty pallet")
    max_weight: Optional[float] = Field(
        default=None,
        gt=0,
        description="Maximum goods weight on the pallet, tare excluded")
    weight_unit: str = Field(default="kg", description="One of kg, lb")

    @field_validator("unit")
    @classmethod
    def check_unit(cls, value: str) -> str:
        return _check_length_unit(value)

    @field_validator("weight_unit")
    @classmethod
    def check_weight_unit(cls, value: str) -> str:
        return _check_weight_unit(value)

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(length=self.length, width=self.width, height=self.height, unit=self.unit)

    @property
    def footprint(self) -> float:
        return self.length * self.width


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = Field(default=0.0, ge=0)
    y: float = Field(default=0.0, ge=0)
    z: float = Field(default=0.0, ge=0)


class Rotation(BaseModel):
    """Rotation in degrees about each axis; all zero means as given."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Placement(BaseModel):
    """A run of identical units laid side by side on one pallet."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(description="Identifier of the placed product")
    quantity: int = Field(ge=1, description="Units in this run")
    position: Position = Field(description="Offset of the first unit from the pallet's near corner (cm)")
    rotation: Rotation = Field(default_factory=Rotation)

    # Oriented unit dims after rotation: (L, W, H) in cm
    size: Tuple[float, float, float] = Field(description="Oriented unit dimensions (L, W, H)")
    unit_weight: float = Field(default=0.0, ge=0, description="Weight of one unit in kg")


class PalletArrangement(BaseModel):
    """One loaded pallet and where it stands in the container."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    pallet: PalletTemplate = Field(description="Normalized pallet template (cm, kg)")
    position: Position = Field(description="Near corner of the pallet in the container (cm)")
    rotation: Rotation = Field(default_factory=Rotation)
    placements: list[Placement] = Field(default_factory=list)
    goods_weight: float = 0.0
    weight: float = Field(default=0.0, description="Tare plus goods, kg")
    stack_height: float = Field(default=0.0, description="Usable height above the deck (cm)")
    load_height: float = Field(default=0.0, description="Height actually loaded (cm)")
    utilization: float = Field(default=0.0, ge=0, le=100)

    @property
    def units(self) -> int:
        return sum(p.quantity for p in self.placements)


class OptimizationStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    EMPTY_INPUT = "empty_input"
    INVALID_PRODUCT = "invalid_product"
    OVERSIZED = "oversized"


class OptimizationResult(BaseModel):
    """Standard result returned by ``optimize``."""

    model_config = ConfigDict(frozen=True)

    success: bool
    status: OptimizationStatus
    message: Optional[str] = None
    utilization: float = Field(default=0.0, ge=0, le=100)
    weight_utilization: Optional[float] = Field(default=None, ge=0, le=100)
    pallet_arrangements: list[PalletArrangement] = Field(default_factory=list)
    remaining_products: list[ProductRequest] = Field(default_factory=list)
    invalid_products: list[str] = Field(default_factory=list)


class OptimizationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    utilization: float
    total_pallets: int
    total_products: int
    remaining_products: int
    weight_utilization: Optional[float] = None
    message: Optional[str] = None


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    invalid_products: list[str] = Field(default_factory=list)
