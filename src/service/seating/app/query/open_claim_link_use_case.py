from datetime import datetime
from typing import Callable

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.claim_seat_use_case import utc_now
from src.service.seating.app.dto import ClaimLinkView
from src.service.seating.app.interface.i_participant_directory import IParticipantDirectory
from src.service.seating.domain.entity.seat_claim_token_entity import ClaimTokenState
from src.service.seating.domain.seating_errors import TokenInvalidError


class OpenClaimLinkUseCase:
    """
    Load the self-service seat page for a claim link

    Read-only: opening a link never consumes it. A consumed link still opens and shows
    the participant's seat; an expired or unknown link fails.
    """

    def __init__(
        self,
        *,
        uow_factory: SeatingUnitOfWorkFactory,
        participant_directory: IParticipantDirectory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow_factory = uow_factory
        self.participant_directory = participant_directory
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @Logger.io(truncate_content=True)
    async def open_link(self, *, token: str) -> ClaimLinkView:
        """
        Raises:
            TokenInvalidError: Unknown or expired link
            NotFoundError: The trip has no bus configured
        """
        with self.tracer.start_as_current_span('use_case.open_claim_link') as span:
            async with self.uow_factory() as uow:
                claim_token = await uow.seat_claim_token_repo.get_by_token(token=token)
                if claim_token is None:
                    raise TokenInvalidError()

                state = claim_token.state_at(self.clock())
                if state == ClaimTokenState.EXPIRED:
                    raise TokenInvalidError()
                span.set_attribute('participant.id', str(claim_token.participant_id))

                configuration = await uow.bus_configuration_repo.get_by_trip_id(
                    trip_id=claim_token.trip_id
                )
                if not configuration:
                    raise NotFoundError('No bus configured for this trip')

                assignments = await uow.seat_assignment_repo.list_by_config(
                    bus_config_id=configuration.id
                )

            occupied = [a.seat_number for a in assignments]
            current = next(
                (a for a in assignments if a.participant_id == claim_token.participant_id), None
            )
            names = await self.participant_directory.get_display_names(
                participant_ids=[claim_token.participant_id]
            )

            return ClaimLinkView(
                participant_id=claim_token.participant_id,
                trip_id=claim_token.trip_id,
                state=state,
                expires_at=claim_token.expires_at,
                layout=configuration.seat_map(),
                occupied_seat_numbers=occupied,
                available_seats=configuration.available_seats(occupied),
                current_seat=current.seat_number if current else None,
                participant_name=names.get(claim_token.participant_id),
            )
