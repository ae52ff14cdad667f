from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.seat_assignment_entity import SeatAssignment


class UnassignSeatUseCase:
    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def unassign(self, *, assignment_id: UUID) -> SeatAssignment:
        """
        Free a seat. A consumed claim link is not revived by this.

        Returns:
            The removed assignment

        Raises:
            NotFoundError: If the assignment does not exist
        """
        with self.tracer.start_as_current_span(
            'use_case.unassign_seat', attributes={'assignment.id': str(assignment_id)}
        ):
            async with self.uow_factory() as uow:
                assignment = await uow.seat_assignment_repo.get_by_id(assignment_id=assignment_id)
                if not assignment or not await uow.seat_assignment_repo.delete(
                    assignment_id=assignment_id
                ):
                    raise NotFoundError(f'Seat assignment {assignment_id} not found')
                await uow.commit()

            Logger.base.info(
                f'💺 [UNASSIGN] Seat {assignment.seat_number} freed '
                f'(participant {assignment.participant_id}, config={assignment.bus_config_id})'
            )
            return assignment
