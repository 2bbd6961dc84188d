from pydantic import BaseModel, ConfigDict, Field as ModelField, model_validator
from typing import Dict, List, Optional


class Crop(BaseModel):
    """Read-only crop catalog entry."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    cost: int = ModelField(gt=0)          # per unit planted
    sale_price: int = ModelField(ge=0)    # per unit harvested
    ideal_heat: float = 1.0
    ideal_wetness: float = 1.0
    heat_factor: float = 1.0              # sensitivity to heat deviation
    wetness_factor: float = 1.0           # sensitivity to wetness deviation


class Field(BaseModel):
    """A land parcel. Refers to its planted crop by name, never owns it."""
    name: str
    description: str = ""
    price: int = ModelField(ge=0)
    capacity: int = ModelField(gt=0)      # max crop quantity
    soil_quality: float = ModelField(default=1.0, gt=0)
    crop_name: Optional[str] = None
    quantity: int = 0
    last_revenue: int = 0

    @model_validator(mode="after")
    def _check_planting(self):
        if not 0 <= self.quantity <= self.capacity:
            raise ValueError(f"quantity must be between 0 and {self.capacity}")
        if (self.quantity > 0) != (self.crop_name is not None):
            raise ValueError("a planted field needs both a crop and a quantity")
        return self

    @property
    def is_empty(self) -> bool:
        return self.crop_name is None

    def plant(self, crop: Crop, quantity: int):
        if not self.is_empty:
            raise ValueError(f"{self.name} is already planted")
        if quantity <= 0 or quantity > self.capacity:
            raise ValueError(f"quantity must be between 1 and {self.capacity}")
        self.crop_name = crop.name
        self.quantity = quantity

    def clear(self):
        self.crop_name = None
        self.quantity = 0


class GameState(BaseModel):
    """All mutable state of one session."""
    balance: int = 500
    expenditure: int = 0      # spent this year
    new_assets: int = 0       # fields bought this year
    year: int = 1
    score: int = 0
    owned_fields: List[Field] = ModelField(default_factory=list)
    available_fields: List[Field] = ModelField(default_factory=list)
    crops: List[Crop] = ModelField(default_factory=list)
    exiting: bool = False

    @property
    def crops_by_name(self) -> Dict[str, Crop]:
        return {c.name: c for c in self.crops}

    def crop_for(self, field: Field) -> Optional[Crop]:
        if field.crop_name is None:
            return None
        return self.crops_by_name[field.crop_name]

    @property
    def cheapest_crop_cost(self) -> int:
        return min(c.cost for c in self.crops)

    def can_afford_crops(self) -> bool:
        return self.balance > self.cheapest_crop_cost

    def empty_fields(self) -> List[Field]:
        return [f for f in self.owned_fields if f.is_empty]

    def affordable_crops(self) -> List[Crop]:
        return [c for c in self.crops if c.cost <= self.balance]

    def total_assets(self) -> int:
        return sum(f.price for f in self.owned_fields)
