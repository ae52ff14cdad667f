from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.layout_geometry import (
    LayoutGeometry,
    SeatMapLayout,
    compute_total_seats,
    generate_seat_map,
)
from src.service.seating.domain.seating_errors import SeatingValidationError


@attrs.define
class BusConfiguration:
    """
    The concrete bus of one trip.

    Geometry and amenities are copied at creation, so later template deletions
    never reach a configured trip. `total_seats` is fixed for the configuration's lifetime.
    """

    id: UUID
    trip_id: UUID
    geometry: LayoutGeometry
    amenities: BusAmenities
    total_seats: int
    template_id: Optional[UUID] = None
    carrier_id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        trip_id: UUID,
        geometry: LayoutGeometry,
        amenities: Optional[BusAmenities] = None,
        template_id: Optional[UUID] = None,
        carrier_id: Optional[UUID] = None,
    ) -> 'BusConfiguration':
        return cls(
            id=uuid7(),
            trip_id=trip_id,
            geometry=geometry,
            amenities=amenities or BusAmenities(),
            total_seats=compute_total_seats(geometry),
            template_id=template_id,
            carrier_id=carrier_id,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def from_template(
        cls, *, trip_id: UUID, template: LayoutTemplate, carrier_id: Optional[UUID] = None
    ) -> 'BusConfiguration':
        return cls.create(
            trip_id=trip_id,
            geometry=template.geometry,
            amenities=template.amenities,
            template_id=template.id,
            carrier_id=carrier_id,
        )

    def seat_map(self) -> SeatMapLayout:
        return generate_seat_map(self.geometry, self.amenities)

    def seat_numbers(self) -> range:
        return range(1, self.total_seats + 1)

    def available_seats(self, occupied_seat_numbers: Iterable[int]) -> List[int]:
        occupied = set(occupied_seat_numbers)
        return [n for n in self.seat_numbers() if n not in occupied]

    def ensure_seat_in_range(self, seat_number: int) -> None:
        if isinstance(seat_number, bool) or not isinstance(seat_number, int):
            raise SeatingValidationError(f'Seat number must be an integer, got {seat_number!r}')
        if not 1 <= seat_number <= self.total_seats:
            raise SeatingValidationError(
                f'Seat {seat_number} does not exist on this bus (valid: 1..{self.total_seats})'
            )
