import attrs


@attrs.frozen
class BusAmenities:
    """On-board features drawn on the seat map. Advisory only, they never change numbering."""

    has_driver_seat: bool = True
    has_guide_seat: bool = True
    has_front_door: bool = True
    has_rear_door: bool = True
    has_wc: bool = False

    def to_dict(self) -> dict[str, bool]:
        return attrs.asdict(self)

