"""
Claim Seat Use Case - self-service seat choice through a single-use link
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import ClaimSeatResult, ClaimStatus
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.entity.seat_assignment_entity import (
    AssignmentSource,
    SeatAssignment,
)
from src.service.seating.domain.entity.seat_claim_token_entity import ClaimTokenState
from src.service.seating.domain.seating_errors import (
    ParticipantAlreadySeatedError,
    SeatConflictError,
    TokenInvalidError,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ClaimSeatUseCase:
    """
    Claim Seat Use Case

    Flow:
    1. Load the token; unknown or expired -> TokenInvalidError
    2. Load the trip's bus and the participant's current seat
    3. Already seated -> ALREADY_SEATED, token left as it is
    4. Insert the assignment and consume the token in one unit of work -> CLAIMED
       - seat lost to a concurrent writer -> SEAT_TAKEN, token stays usable
       - same link racing itself -> ALREADY_SEATED

    The token is consumed only together with a successful insert, so a participant
    who loses a race, or was seated by staff, keeps a working link.
    """

    def __init__(
        self,
        *,
        uow_factory: SeatingUnitOfWorkFactory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow_factory = uow_factory
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def claim_seat(self, *, token: str, seat_number: int) -> ClaimSeatResult:
        """
        Args:
            token: Opaque claim link token
            seat_number: Seat picked by the participant

        Returns:
            ClaimSeatResult with status CLAIMED, ALREADY_SEATED or SEAT_TAKEN

        Raises:
            TokenInvalidError: Unknown, expired, or consumed without a seat to show
            NotFoundError: The trip has no bus configured
            SeatingValidationError: Seat number outside [1, total_seats]
        """
        with self.tracer.start_as_current_span(
            'use_case.claim_seat', attributes={'seat.number': seat_number}
        ) as span:
            now = self.clock()
            configuration: Optional[BusConfiguration] = None
            participant_id: Optional[UUID] = None

            try:
                async with self.uow_factory() as uow:
                    claim_token = await uow.seat_claim_token_repo.get_by_token(token=token)
                    if claim_token is None:
                        raise TokenInvalidError()

                    state = claim_token.state_at(now)
                    if state == ClaimTokenState.EXPIRED:
                        raise TokenInvalidError()

                    participant_id = claim_token.participant_id
                    span.set_attribute('participant.id', str(participant_id))

                    configuration = await uow.bus_configuration_repo.get_by_trip_id(
                        trip_id=claim_token.trip_id
                    )
                    if not configuration:
                        raise NotFoundError('No bus configured for this trip')

                    existing = await uow.seat_assignment_repo.get_by_participant(
                        bus_config_id=configuration.id, participant_id=participant_id
                    )
                    if existing:
                        # Replay, or staff seated them: the link is consumed only by its own insert
                        span.set_attribute('claim.status', ClaimStatus.ALREADY_SEATED.value)
                        return ClaimSeatResult(
                            status=ClaimStatus.ALREADY_SEATED, seat_number=existing.seat_number
                        )

                    if state == ClaimTokenState.CONSUMED:
                        # Seat was removed by staff after the claim; links are never revived
                        raise TokenInvalidError('This link has already been used')

                    configuration.ensure_seat_in_range(seat_number)

                    await uow.seat_assignment_repo.add(
                        assignment=SeatAssignment.create(
                            bus_config_id=configuration.id,
                            participant_id=participant_id,
                            seat_number=seat_number,
                            source=AssignmentSource.SELF_SERVICE,
                        )
                    )
                    if not await uow.seat_claim_token_repo.mark_used(
                        token_id=claim_token.id, used_at=now
                    ):
                        raise TokenInvalidError('This link has already been used')
                    await uow.commit()

            except SeatConflictError:
                span.set_attribute('claim.status', ClaimStatus.SEAT_TAKEN.value)
                Logger.base.info(
                    f'⚠️ [CLAIM] Seat {seat_number} already taken, participant {participant_id} '
                    f'keeps the link'
                )
                return ClaimSeatResult(
                    status=ClaimStatus.SEAT_TAKEN,
                    seat_number=seat_number,
                    available_seats=await self._available_seats(configuration),  # type: ignore[arg-type]
                )

            except ParticipantAlreadySeatedError:
                # The same link submitted twice at once: the other request won
                seat = await self._current_seat(configuration, participant_id)  # type: ignore[arg-type]
                if seat is None:
                    # The winning request rolled back in between
                    raise
                span.set_attribute('claim.status', ClaimStatus.ALREADY_SEATED.value)
                return ClaimSeatResult(status=ClaimStatus.ALREADY_SEATED, seat_number=seat)

            span.set_attribute('claim.status', ClaimStatus.CLAIMED.value)
            Logger.base.info(
                f'✅ [CLAIM] Participant {participant_id} claimed seat {seat_number} '
                f'(config={configuration.id})'  # type: ignore[union-attr]
            )
            return ClaimSeatResult(status=ClaimStatus.CLAIMED, seat_number=seat_number)

    async def _available_seats(self, configuration: BusConfiguration) -> List[int]:
        async with self.uow_factory() as uow:
            assignments = await uow.seat_assignment_repo.list_by_config(
                bus_config_id=configuration.id
            )
        return configuration.available_seats(a.seat_number for a in assignments)

    async def _current_seat(
        self, configuration: BusConfiguration, participant_id: UUID
    ) -> Optional[int]:
        async with self.uow_factory() as uow:
            existing = await uow.seat_assignment_repo.get_by_participant(
                bus_config_id=configuration.id, participant_id=participant_id
            )
        return existing.seat_number if existing else None
