from typing import Iterable, Optional
from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import OccupiedSeat, SeatMapView
from src.service.seating.app.interface.i_participant_directory import IParticipantDirectory


class GetSeatMapUseCase:
    """
    Staff seat map

    Combines the generated layout with the ledger. When the trip's participant list is
    passed in, the view also lists who still has no seat (the staff "to seat" panel).
    """

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
    async def get_seat_map(
        self, *, config_id: UUID, trip_participant_ids: Optional[Iterable[UUID]] = None
    ) -> SeatMapView:
        with self.tracer.start_as_current_span(
            'use_case.get_seat_map', attributes={'bus_config.id': str(config_id)}
        ):
            async with self.uow_factory() as uow:
                configuration = await uow.bus_configuration_repo.get_by_id(config_id=config_id)
                if not configuration:
                    raise NotFoundError(f'Bus configuration {config_id} not found')
                assignments = await uow.seat_assignment_repo.list_by_config(
                    bus_config_id=config_id
                )

            names = await self.participant_directory.get_display_names(
                participant_ids=[a.participant_id for a in assignments]
            )
            occupied = [
                OccupiedSeat(
                    assignment_id=a.id,
                    seat_number=a.seat_number,
                    participant_id=a.participant_id,
                    display_name=names.get(a.participant_id),
                    source=a.source,
                )
                for a in assignments
            ]

            seated = {a.participant_id for a in assignments}
            unseated = [
                participant_id
                for participant_id in dict.fromkeys(trip_participant_ids or [])
                if participant_id not in seated
            ]

            return SeatMapView(
                configuration=configuration,
                layout=configuration.seat_map(),
                occupied=occupied,
                available_seats=configuration.available_seats(a.seat_number for a in assignments),
                unseated_participant_ids=unseated,
            )
