from typing import List
from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import OccupiedSeat
from src.service.seating.app.interface.i_participant_directory import IParticipantDirectory


class ListSeatAssignmentsUseCase:
    def __init__(
        self,
        *,
        uow_factory: SeatingUnitOfWorkFactory,
        participant_directory: IParticipantDirectory,
    ) -> None:
        self.uow_factory = uow_factory
        self.participant_directory = participant_directory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io(truncate_content=True)
    async def list_by_config(self, *, config_id: UUID) -> List[OccupiedSeat]:
        """
        Occupied seats ordered by seat number, labelled with participant display names

        Raises:
            NotFoundError: If the configuration does not exist
        """
        with self.tracer.start_as_current_span(
            'use_case.list_seat_assignments', attributes={'bus_config.id': str(config_id)}
        ):
            async with self.uow_factory() as uow:
                if not await uow.bus_configuration_repo.get_by_id(config_id=config_id):
                    raise NotFoundError(f'Bus configuration {config_id} not found')
                assignments = await uow.seat_assignment_repo.list_by_config(
                    bus_config_id=config_id
                )

            names = await self.participant_directory.get_display_names(
                participant_ids=[a.participant_id for a in assignments]
            )
            return [
                OccupiedSeat(
                    assignment_id=a.id,
                    seat_number=a.seat_number,
                    participant_id=a.participant_id,
                    display_name=names.get(a.participant_id),
                    source=a.source,
                )
                for a in assignments
            ]

    @Logger.io(truncate_content=True)
    async def available_seats(self, *, config_id: UUID) -> List[int]:
        """Every seat number of the bus that nobody holds, ascending"""
        with self.tracer.start_as_current_span(
            'use_case.list_available_seats', attributes={'bus_config.id': str(config_id)}
        ):
            async with self.uow_factory() as uow:
                configuration = await uow.bus_configuration_repo.get_by_id(config_id=config_id)
                if not configuration:
                    raise NotFoundError(f'Bus configuration {config_id} not found')
                assignments = await uow.seat_assignment_repo.list_by_config(
                    bus_config_id=config_id
                )
            return configuration.available_seats(a.seat_number for a in assignments)
