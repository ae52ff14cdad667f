from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.seat_assignment_entity import (
    AssignmentSource,
    SeatAssignment,
)


class AssignSeatUseCase:
    """
    Staff seat assignment

    The ledger's insert-or-conflict decides races; this use case only validates the
    seat range first. Moving a participant means Unassign then Assign.
    """

    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def assign(
        self, *, config_id: UUID, participant_id: UUID, seat_number: int
    ) -> SeatAssignment:
        """
        Args:
            config_id: Bus configuration
            participant_id: Passenger to seat
            seat_number: 1-based seat number

        Returns:
            The stored assignment

        Raises:
            NotFoundError: Unknown configuration
            SeatingValidationError: Seat number outside [1, total_seats]
            SeatConflictError: Seat already taken (reload and retry)
            ParticipantAlreadySeatedError: Participant already has a seat (unassign first)
        """
        with self.tracer.start_as_current_span(
            'use_case.assign_seat',
            attributes={
                'bus_config.id': str(config_id),
                'participant.id': str(participant_id),
                'seat.number': seat_number,
            },
        ):
            async with self.uow_factory() as uow:
                configuration = await uow.bus_configuration_repo.get_by_id(config_id=config_id)
                if not configuration:
                    raise NotFoundError(f'Bus configuration {config_id} not found')

                configuration.ensure_seat_in_range(seat_number)

                assignment = await uow.seat_assignment_repo.add(
                    assignment=SeatAssignment.create(
                        bus_config_id=config_id,
                        participant_id=participant_id,
                        seat_number=seat_number,
                        source=AssignmentSource.STAFF,
                    )
                )
                await uow.commit()

            Logger.base.info(
                f'💺 [ASSIGN] Seat {seat_number} -> participant {participant_id} (config={config_id})'
            )
            return assignment
