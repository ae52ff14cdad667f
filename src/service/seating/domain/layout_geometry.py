"""
Layout Generator

Pure seat-map geometry: layout parameters -> ordered seat descriptors.
No state, no I/O. The staff seat map and the self-service page both render from
the same parameters, so the same input must always yield the same numbering.

Two layout families, modelled as a tagged union:
- StandardLayout: `rows` x `seats_per_row` with a back bench as the last row
- AsymmetricLayout: independent left/right row counts with a cosmetic door marker
"""

from enum import StrEnum
import math
from typing import Any, ClassVar, Mapping, Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.seating_errors import (
    LayoutValidationError,
    SeatingValidationError,
)


LAST_ROW_SEATS_MIN = 3
LAST_ROW_SEATS_MAX = 6
STANDARD_ROWS_MIN = 2  # at least one normal row in front of the back bench
SEATS_PER_ROW_CHOICES = (2, 4)
ASYMMETRIC_SEATS_PER_SIDE = 2
REAR_DOOR_ROW_RATIO = 0.55


class LayoutFamily(StrEnum):
    STANDARD = 'standard'
    ASYMMETRIC = 'asymmetric'


class SeatSide(StrEnum):
    LEFT = 'left'
    RIGHT = 'right'
    BACK = 'back'


# =============================================================================
# Validators
# =============================================================================


def _require_int(attribute: attrs.Attribute, value: Any) -> None:
    # bool is an int subclass, but True rows is never what the caller meant
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutValidationError(f'{attribute.name} must be an integer, got {value!r}')


def _validate_positive(instance: object, attribute: attrs.Attribute, value: Any) -> None:
    _require_int(attribute, value)
    if value < 1:
        raise LayoutValidationError(f'{attribute.name} must be positive, got {value}')


def _validate_standard_rows(instance: object, attribute: attrs.Attribute, value: Any) -> None:
    _require_int(attribute, value)
    if value < STANDARD_ROWS_MIN:
        raise LayoutValidationError(
            f'{attribute.name} must be at least {STANDARD_ROWS_MIN} (back bench included), got {value}'
        )


def _validate_seats_per_row(instance: object, attribute: attrs.Attribute, value: Any) -> None:
    _require_int(attribute, value)
    if value not in SEATS_PER_ROW_CHOICES:
        raise LayoutValidationError(
            f'{attribute.name} must be one of {SEATS_PER_ROW_CHOICES} (split evenly across the aisle), got {value}'
        )


def _validate_last_row_seats(instance: object, attribute: attrs.Attribute, value: Any) -> None:
    _require_int(attribute, value)
    if not LAST_ROW_SEATS_MIN <= value <= LAST_ROW_SEATS_MAX:
        raise LayoutValidationError(
            f'{attribute.name} must be between {LAST_ROW_SEATS_MIN} and {LAST_ROW_SEATS_MAX}, got {value}'
        )


# =============================================================================
# Layout parameters (tagged union)
# =============================================================================


@attrs.frozen
class StandardLayout:
    family: ClassVar[LayoutFamily] = LayoutFamily.STANDARD

    rows: int = attrs.field(validator=_validate_standard_rows)
    seats_per_row: int = attrs.field(default=4, validator=_validate_seats_per_row)
    last_row_seats: int = attrs.field(default=5, validator=_validate_last_row_seats)

    @property
    def normal_row_count(self) -> int:
        return self.rows - 1

    @property
    def total_seats(self) -> int:
        return (self.rows - 1) * self.seats_per_row + self.last_row_seats

    def to_dict(self) -> dict[str, Any]:
        return {'family': self.family.value, **attrs.asdict(self)}


@attrs.frozen
class AsymmetricLayout:
    """
    Left and right sides carry their own row counts.

    `door_row_position` is the 1-based right-side row where the middle door sits.
    It is a marker only: every row index keeps 2 seats per side that has a row there.
    """

    family: ClassVar[LayoutFamily] = LayoutFamily.ASYMMETRIC

    left_rows: int = attrs.field(validator=_validate_positive)
    right_rows: int = attrs.field(validator=_validate_positive)
    door_row_position: int = attrs.field(validator=_validate_positive)
    last_row_seats: int = attrs.field(default=5, validator=_validate_last_row_seats)

    def __attrs_post_init__(self) -> None:
        if self.door_row_position > self.right_rows:
            raise LayoutValidationError(
                f'door_row_position ({self.door_row_position}) must point at an existing '
                f'right-side row (1..{self.right_rows})'
            )

    @property
    def normal_row_count(self) -> int:
        return max(self.left_rows, self.right_rows)

    @property
    def total_seats(self) -> int:
        return (
            self.left_rows * ASYMMETRIC_SEATS_PER_SIDE
            + self.right_rows * ASYMMETRIC_SEATS_PER_SIDE
            + self.last_row_seats
        )

    def to_dict(self) -> dict[str, Any]:
        return {'family': self.family.value, **attrs.asdict(self)}


LayoutGeometry = StandardLayout | AsymmetricLayout

_FAMILY_FIELDS: dict[LayoutFamily, frozenset[str]] = {
    LayoutFamily.STANDARD: frozenset(field.name for field in attrs.fields(StandardLayout)),
    LayoutFamily.ASYMMETRIC: frozenset(field.name for field in attrs.fields(AsymmetricLayout)),
}


def geometry_from_dict(data: Mapping[str, Any]) -> LayoutGeometry:
    """
    Build layout parameters from a flat mapping (stored columns, request payloads).

    The `family` key selects the shape; without it the family is inferred from the keys.
    Keys of the other family (other than the shared `last_row_seats`) are rejected so
    a half-standard, half-asymmetric payload can never slip through.
    """
    values = {key: value for key, value in data.items() if value is not None}
    raw_family = values.pop('family', None)

    if raw_family is None:
        family = (
            LayoutFamily.ASYMMETRIC
            if {'left_rows', 'right_rows'} & values.keys()
            else LayoutFamily.STANDARD
        )
    else:
        try:
            family = LayoutFamily(raw_family)
        except ValueError:
            raise LayoutValidationError(f'Unknown layout family: {raw_family!r}')

    unexpected = set(values) - _FAMILY_FIELDS[family]
    if unexpected:
        raise LayoutValidationError(
            f'Unexpected parameters for {family} layout: {", ".join(sorted(unexpected))}'
        )

    try:
        if family == LayoutFamily.STANDARD:
            return StandardLayout(**values)
        return AsymmetricLayout(**values)
    except TypeError as e:
        # missing required parameter
        raise LayoutValidationError(f'Incomplete {family} layout parameters: {e}')


def as_geometry(value: LayoutGeometry | Mapping[str, Any]) -> LayoutGeometry:
    if isinstance(value, StandardLayout | AsymmetricLayout):
        return value
    if isinstance(value, Mapping):
        return geometry_from_dict(value)
    raise LayoutValidationError(f'Unsupported layout parameters: {value!r}')


def compute_total_seats(geometry: LayoutGeometry) -> int:
    if not isinstance(geometry, StandardLayout | AsymmetricLayout):
        raise LayoutValidationError(f'Unsupported layout parameters: {geometry!r}')
    return geometry.total_seats


# =============================================================================
# Seat map
# =============================================================================


@attrs.frozen
class SeatDescriptor:
    seat_number: int
    row: int  # 0-based, the back bench is the last row index
    side: SeatSide
    is_last_row: bool = False


@attrs.frozen
class SeatMapLayout:
    geometry: LayoutGeometry
    amenities: BusAmenities
    seats: tuple[SeatDescriptor, ...]
    normal_row_count: int
    rear_door_row: Optional[int] = None  # visual marker, consumes no seat numbers
    wc_row: Optional[int] = None

    @property
    def total_seats(self) -> int:
        return len(self.seats)

    @property
    def back_row(self) -> int:
        return self.normal_row_count

    def seat(self, seat_number: int) -> SeatDescriptor:
        if not 1 <= seat_number <= self.total_seats:
            raise SeatingValidationError(
                f'Seat {seat_number} does not exist (valid: 1..{self.total_seats})'
            )
        return self.seats[seat_number - 1]

    def rows(self) -> list[list[SeatDescriptor]]:
        grouped: list[list[SeatDescriptor]] = [[] for _ in range(self.back_row + 1)]
        for seat in self.seats:
            grouped[seat.row].append(seat)
        return grouped


@Logger.io(truncate_content=True)
def generate_seat_map(
    geometry: LayoutGeometry, amenities: Optional[BusAmenities] = None
) -> SeatMapLayout:
    """
    Number every seat of a layout.

    Normal rows run front to back, left seats before right seats within a row;
    the back bench closes the numbering as one unbroken run.
    """
    total_seats = compute_total_seats(geometry)
    amenities = amenities or BusAmenities()

    seats: list[SeatDescriptor] = []

    def emit(row: int, side: SeatSide, count: int, *, is_last_row: bool = False) -> None:
        for _ in range(count):
            seats.append(
                SeatDescriptor(
                    seat_number=len(seats) + 1, row=row, side=side, is_last_row=is_last_row
                )
            )

    if isinstance(geometry, StandardLayout):
        per_side = geometry.seats_per_row // 2
        for row in range(geometry.normal_row_count):
            emit(row, SeatSide.LEFT, per_side)
            emit(row, SeatSide.RIGHT, per_side)
        rear_door_row = math.floor(geometry.normal_row_count * REAR_DOOR_ROW_RATIO)
    else:
        for row in range(geometry.normal_row_count):
            if row < geometry.left_rows:
                emit(row, SeatSide.LEFT, ASYMMETRIC_SEATS_PER_SIDE)
            if row < geometry.right_rows:
                emit(row, SeatSide.RIGHT, ASYMMETRIC_SEATS_PER_SIDE)
        rear_door_row = geometry.door_row_position - 1

    emit(geometry.normal_row_count, SeatSide.BACK, geometry.last_row_seats, is_last_row=True)

    if len(seats) != total_seats:
        raise LayoutValidationError(
            f'Generated {len(seats)} seats but the layout declares {total_seats}'
        )

    return SeatMapLayout(
        geometry=geometry,
        amenities=amenities,
        seats=tuple(seats),
        normal_row_count=geometry.normal_row_count,
        rear_door_row=rear_door_row if amenities.has_rear_door else None,
        wc_row=geometry.normal_row_count - 1 if amenities.has_wc else None,
    )
