"""Seating read models and claim results."""

from datetime import datetime
from enum import StrEnum
from typing import List, Optional
from uuid import UUID

import attrs

from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.entity.seat_assignment_entity import AssignmentSource
from src.service.seating.domain.entity.seat_claim_token_entity import ClaimTokenState
from src.service.seating.domain.layout_geometry import SeatMapLayout


@attrs.define(frozen=True)
class OccupiedSeat:
    assignment_id: UUID
    seat_number: int
    participant_id: UUID
    display_name: Optional[str] = None  # None when the directory does not know the participant
    source: AssignmentSource = AssignmentSource.STAFF


@attrs.define(frozen=True)
class BusConfigurationView:
    configuration: BusConfiguration
    layout: SeatMapLayout


@attrs.define(frozen=True)
class SeatMapView:
    """
    Staff seat map: layout, who sits where, and which trip participants still need a seat.
    """

    configuration: BusConfiguration
    layout: SeatMapLayout
    occupied: List[OccupiedSeat]
    available_seats: List[int]
    unseated_participant_ids: List[UUID] = attrs.field(factory=list)


class ClaimStatus(StrEnum):
    CLAIMED = 'claimed'
    ALREADY_SEATED = 'already_seated'
    SEAT_TAKEN = 'seat_taken'


@attrs.define(frozen=True)
class ClaimSeatResult:
    """
    Outcome of a self-service claim.

    - CLAIMED: seat_number is the seat just taken, the token is now consumed
    - ALREADY_SEATED: seat_number is the participant's existing seat
    - SEAT_TAKEN: seat_number is the seat that was lost; pick again from available_seats
    """

    status: ClaimStatus
    seat_number: int
    available_seats: List[int] = attrs.field(factory=list)


@attrs.define(frozen=True)
class ClaimLinkView:
    """Everything the self-service page needs to render a claim link."""

    participant_id: UUID
    trip_id: UUID
    state: ClaimTokenState
    expires_at: datetime
    layout: SeatMapLayout
    occupied_seat_numbers: List[int]
    available_seats: List[int]
    current_seat: Optional[int] = None
    participant_name: Optional[str] = None
