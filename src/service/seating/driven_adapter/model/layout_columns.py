"""
Layout parameter columns shared by templates and configurations

Both families live in one row: `layout_family` says which columns are meaningful,
the other family's columns stay NULL.
"""

from typing import Any, Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.layout_geometry import (
    LayoutGeometry,
    geometry_from_dict,
)


_GEOMETRY_COLUMNS = (
    'rows',
    'seats_per_row',
    'left_rows',
    'right_rows',
    'door_row_position',
    'last_row_seats',
)


class LayoutColumnsMixin:
    layout_family: Mapped[str] = mapped_column(String(20), nullable=False)
    rows: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    seats_per_row: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    left_rows: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    right_rows: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    door_row_position: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    last_row_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)

    has_driver_seat: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    has_guide_seat: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    has_front_door: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    has_rear_door: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    has_wc: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    @staticmethod
    def layout_columns(geometry: LayoutGeometry, amenities: BusAmenities) -> dict[str, Any]:
        stored = geometry.to_dict()
        columns: dict[str, Any] = {name: stored.get(name) for name in _GEOMETRY_COLUMNS}
        columns['layout_family'] = stored['family']
        columns['total_seats'] = geometry.total_seats
        columns.update(amenities.to_dict())
        return columns

    def to_geometry(self) -> LayoutGeometry:
        data: dict[str, Any] = {name: getattr(self, name) for name in _GEOMETRY_COLUMNS}
        data['family'] = self.layout_family
        return geometry_from_dict(data)

    def to_amenities(self) -> BusAmenities:
        return BusAmenities(
            has_driver_seat=self.has_driver_seat,
            has_guide_seat=self.has_guide_seat,
            has_front_door=self.has_front_door,
            has_rear_door=self.has_rear_door,
            has_wc=self.has_wc,
        )
