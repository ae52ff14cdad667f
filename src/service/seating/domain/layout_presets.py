"""
Built-in bus type catalog

Common Italian coach models, from 19-seat minibuses to double-deckers.
Labels are the commercial names and may not match the generated seat count exactly:
the generator's total is always the authoritative capacity.
"""

from enum import StrEnum
from typing import Optional

import attrs

from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.layout_geometry import StandardLayout


class LayoutType(StrEnum):
    MINIBUS = 'minibus'
    MIDI = 'midi'
    GT_MEDIUM = 'gt_medium'
    GT_STANDARD = 'gt_standard'
    GT_LARGE = 'gt_large'
    GT_XLARGE = 'gt_xlarge'
    DOUBLE_DECKER = 'double_decker'


@attrs.frozen
class LayoutPreset:
    label: str
    length_meters: float
    layout_type: LayoutType
    geometry: StandardLayout
    amenities: BusAmenities = BusAmenities()

    @property
    def total_seats(self) -> int:
        return self.geometry.total_seats


def _preset(
    label: str,
    length_meters: float,
    layout_type: LayoutType,
    rows: int,
    last_row_seats: int,
    *,
    has_wc: bool = False,
    has_rear_door: bool = True,
    has_guide_seat: bool = True,
) -> LayoutPreset:
    return LayoutPreset(
        label=label,
        length_meters=length_meters,
        layout_type=layout_type,
        geometry=StandardLayout(rows=rows, seats_per_row=4, last_row_seats=last_row_seats),
        amenities=BusAmenities(
            has_wc=has_wc, has_rear_door=has_rear_door, has_guide_seat=has_guide_seat
        ),
    )


LAYOUT_PRESETS: tuple[LayoutPreset, ...] = (
    # Minibus (single front door)
    _preset('Minibus 19 posti', 6.5, LayoutType.MINIBUS, 5, 3, has_rear_door=False, has_guide_seat=False),
    _preset('Minibus 20 posti', 7.0, LayoutType.MINIBUS, 5, 4, has_rear_door=False),
    _preset('Minibus 24 posti', 7.5, LayoutType.MINIBUS, 6, 4, has_rear_door=False),
    _preset('Minibus 28 posti', 8.0, LayoutType.MINIBUS, 7, 4, has_rear_door=False),
    # Midicoach
    _preset('Midicoach 35 posti', 9.0, LayoutType.MIDI, 8, 3, has_rear_door=False),
    _preset('Midicoach 39 posti', 9.5, LayoutType.MIDI, 9, 3),
    # GT medium
    _preset('GT Medium 44 posti', 10.0, LayoutType.GT_MEDIUM, 10, 4),
    _preset('GT Medium 45 posti', 10.5, LayoutType.GT_MEDIUM, 11, 5),
    # GT standard 12 m
    _preset('GT 49 posti', 12.0, LayoutType.GT_STANDARD, 11, 5),
    _preset('GT 50 posti VIP (WC)', 12.0, LayoutType.GT_STANDARD, 11, 5, has_wc=True),
    _preset('GT 52 posti', 12.0, LayoutType.GT_STANDARD, 12, 4),
    _preset('GT 53 posti', 12.0, LayoutType.GT_STANDARD, 12, 5),
    _preset('GT 54 posti', 12.0, LayoutType.GT_STANDARD, 13, 6),
    _preset('GT 55 posti VIP (WC)', 12.0, LayoutType.GT_STANDARD, 12, 5, has_wc=True),
    _preset('GT 56 posti', 12.5, LayoutType.GT_STANDARD, 13, 4),
    # GT large 13 m
    _preset('GT 57 posti', 13.0, LayoutType.GT_LARGE, 13, 5),
    _preset('GT 58 posti', 13.5, LayoutType.GT_LARGE, 14, 6),
    _preset('GT 59 posti VIP (WC)', 13.5, LayoutType.GT_LARGE, 13, 5, has_wc=True),
    # GT extra large 14-15 m
    _preset('GT 61 posti', 14.0, LayoutType.GT_XLARGE, 14, 5),
    _preset('GT 63 posti', 14.0, LayoutType.GT_XLARGE, 15, 5),
    _preset('GT 64 posti VIP (WC)', 14.5, LayoutType.GT_XLARGE, 14, 4, has_wc=True),
    _preset('GT 65 posti', 15.0, LayoutType.GT_XLARGE, 15, 5),
    # Double decker
    _preset('Bipiano 78 posti (WC)', 13.5, LayoutType.DOUBLE_DECKER, 18, 6, has_wc=True),
    _preset('Bipiano 79 posti (WC)', 14.0, LayoutType.DOUBLE_DECKER, 19, 5, has_wc=True),
    _preset('Bipiano 80 posti (WC)', 14.0, LayoutType.DOUBLE_DECKER, 19, 4, has_wc=True),
)


def find_preset(label: str) -> Optional[LayoutPreset]:
    normalized = label.strip().casefold()
    for preset in LAYOUT_PRESETS:
        if preset.label.casefold() == normalized:
            return preset
    return None
