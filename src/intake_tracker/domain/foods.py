"""Food cache domain models."""

from dataclasses import dataclass, field

SOURCE_CACHE = "cache"
SOURCE_API = "api"


@dataclass(frozen=True)
class NutrientValue:
    """Nutrient amount per 100 g of a food."""

    name: str
    value: float
    unit_name: str


@dataclass(frozen=True)
class CachedFood:
    """Canonical food record with its tracked nutrients."""

    fdc_id: int
    description: str
    brand_name: str | None
    serving_size_unit: str
    serving_size: float
    has_real_serving: bool
    nutrients: list[NutrientValue] = field(default_factory=list)


@dataclass(frozen=True)
class FoodResolution:
    """A resolved food tagged with where it came from."""

    source: str
    food: CachedFood


@dataclass(frozen=True)
class FoodSearchResult:
    """Search hit from FDC with its macro values."""

    fdc_id: int
    description: str
    brand_name: str
    nutrients: dict[str, float]
