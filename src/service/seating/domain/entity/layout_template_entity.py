from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.layout_geometry import LayoutGeometry, compute_total_seats
from src.service.seating.domain.layout_presets import LayoutPreset, LayoutType
from src.service.seating.domain.seating_errors import SeatingValidationError


TEMPLATE_NAME_MIN_LENGTH = 2
LENGTH_METERS_MIN = 6.0
LENGTH_METERS_MAX = 18.0


@attrs.define
class LayoutTemplate:
    """A named, reusable bus type. Immutable once stored: replace it, never edit it."""

    id: UUID
    name: str
    geometry: LayoutGeometry
    amenities: BusAmenities
    total_seats: int
    is_custom: bool = False
    layout_type: LayoutType = LayoutType.GT_STANDARD
    length_meters: Optional[float] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        name: str,
        geometry: LayoutGeometry,
        amenities: Optional[BusAmenities] = None,
        is_custom: bool = False,
        layout_type: LayoutType | str = LayoutType.GT_STANDARD,
        length_meters: Optional[float] = None,
        description: Optional[str] = None,
    ) -> 'LayoutTemplate':
        name = (name or '').strip()
        if len(name) < TEMPLATE_NAME_MIN_LENGTH:
            raise SeatingValidationError(
                f'Template name must be at least {TEMPLATE_NAME_MIN_LENGTH} characters'
            )

        try:
            layout_type = LayoutType(layout_type)
        except ValueError:
            raise SeatingValidationError(f'Unknown layout type: {layout_type!r}')

        if length_meters is not None and not LENGTH_METERS_MIN <= length_meters <= LENGTH_METERS_MAX:
            raise SeatingValidationError(
                f'length_meters must be between {LENGTH_METERS_MIN:g} and {LENGTH_METERS_MAX:g}'
            )

        return cls(
            id=uuid7(),
            name=name,
            geometry=geometry,
            amenities=amenities or BusAmenities(),
            total_seats=compute_total_seats(geometry),
            is_custom=is_custom,
            layout_type=layout_type,
            length_meters=length_meters,
            description=(description or '').strip() or None,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def from_preset(cls, preset: LayoutPreset, *, name: Optional[str] = None) -> 'LayoutTemplate':
        return cls.create(
            name=name or preset.label,
            geometry=preset.geometry,
            amenities=preset.amenities,
            is_custom=False,
            layout_type=preset.layout_type,
            length_meters=preset.length_meters,
        )
