# src/taskviews/storage/locations.py

"""
Warehouse storage-location definitions and their capacity models.

Each storage type has a default grid and a default way of measuring capacity:
- grid_slot: rows x columns x levels discrete slots
- area_based / volume_based / weight_based: a single configured maximum

Capacity is computed through a table keyed by CapacityType, so a new model is
one new entry.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class StorageType(StrEnum):
    SHELF = "shelf"
    RACK = "rack"
    PALLET = "pallet"
    FLOOR_AREA = "floor_area"
    BOX = "box"
    TANK = "tank"


class CapacityType(StrEnum):
    GRID_SLOT = "grid_slot"
    AREA_BASED = "area_based"
    VOLUME_BASED = "volume_based"
    WEIGHT_BASED = "weight_based"


@dataclass(frozen=True, slots=True)
class StorageTypeSpec:
    type: StorageType
    name: str
    description: str
    default_rows: int
    default_columns: int
    default_levels: int
    capacity_type: CapacityType


STORAGE_TYPES: dict[StorageType, StorageTypeSpec] = {
    StorageType.SHELF: StorageTypeSpec(
        StorageType.SHELF, "Shelf", "Row x column grid of bays", 5, 4, 1, CapacityType.GRID_SLOT
    ),
    StorageType.RACK: StorageTypeSpec(
        StorageType.RACK, "Rack", "Vertical hanging / leaning storage", 10, 2, 1,
        CapacityType.GRID_SLOT,
    ),
    StorageType.PALLET: StorageTypeSpec(
        StorageType.PALLET, "Pallet", "Flat pallet positions", 2, 5, 1, CapacityType.AREA_BASED
    ),
    StorageType.FLOOR_AREA: StorageTypeSpec(
        StorageType.FLOOR_AREA, "Floor area", "Marked floor zone", 1, 1, 1,
        CapacityType.AREA_BASED,
    ),
    StorageType.BOX: StorageTypeSpec(
        StorageType.BOX, "Box", "Bins for small parts", 4, 6, 2, CapacityType.GRID_SLOT
    ),
    StorageType.TANK: StorageTypeSpec(
        StorageType.TANK, "Tank", "Liquid or powder material", 1, 1, 1,
        CapacityType.VOLUME_BASED,
    ),
}


@dataclass(slots=True)
class StorageLocation:
    id: str
    code: str
    name: str
    storage_type: StorageType
    rows: int = 1
    columns: int = 1
    levels: int = 1
    material_types: list[str] = field(default_factory=list)
    is_active: bool = True
    description: str = ""

    max_items: int | None = None
    max_volume: float | None = None
    max_weight: float | None = None

    # None -> the storage type's default capacity model
    capacity_type: CapacityType | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def spec(self) -> StorageTypeSpec:
        return STORAGE_TYPES[self.storage_type]

    @property
    def effective_capacity_type(self) -> CapacityType:
        return self.capacity_type or self.spec.capacity_type

    @property
    def dimensions(self) -> str:
        return f"{self.rows or 0}x{self.columns or 0}x{self.levels or 1}"


def new_location(
    id: str,
    code: str,
    name: str,
    storage_type: StorageType | str,
    *,
    material_types: Iterable[str] = (),
    **overrides,
) -> StorageLocation:
    """Create a location with the grid defaults of its storage type."""
    st = StorageType(storage_type)
    spec = STORAGE_TYPES[st]
    values = {
        "rows": spec.default_rows,
        "columns": spec.default_columns,
        "levels": spec.default_levels,
    }
    values.update(overrides)
    return StorageLocation(
        id=id,
        code=code,
        name=name,
        storage_type=st,
        material_types=list(material_types),
        **values,
    )


def _grid_slots(loc: StorageLocation) -> float | None:
    if not loc.rows or not loc.columns:
        return None
    return float(loc.rows * loc.columns * (loc.levels or 1))


CAPACITY_MODELS: dict[CapacityType, Callable[[StorageLocation], float | None]] = {
    CapacityType.GRID_SLOT: _grid_slots,
    CapacityType.AREA_BASED: lambda loc: None if loc.max_items is None else float(loc.max_items),
    CapacityType.VOLUME_BASED: lambda loc: loc.max_volume,
    CapacityType.WEIGHT_BASED: lambda loc: loc.max_weight,
}


def capacity_of(location: StorageLocation) -> float | None:
    """Total capacity in the location's own unit, or None when unbounded / not configured."""
    return CAPACITY_MODELS[location.effective_capacity_type](location)


@dataclass(frozen=True, slots=True)
class CapacityUsage:
    used: float
    total: float | None

    @property
    def rate(self) -> float | None:
        """Usage in percent."""
        if not self.total:
            return None
        return self.used / self.total * 100.0

    @property
    def is_full(self) -> bool:
        return self.total is not None and self.used >= self.total

    def format(self) -> str:
        if self.rate is None:
            return "N/A"
        return f"{self.used:g}/{self.total:g} ({self.rate:.1f}%)"


def usage(location: StorageLocation, used: float) -> CapacityUsage:
    return CapacityUsage(used=float(used), total=capacity_of(location))


def locations_for_material(
    locations: Iterable[StorageLocation], material_type: str
) -> list[StorageLocation]:
    return [loc for loc in locations if loc.is_active and material_type in loc.material_types]
