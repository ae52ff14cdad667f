from typing import Optional
from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto import BusConfigurationView


class DescribeBusConfigurationUseCase:
    """Configuration plus its generated seat map, as rendered by staff and self-service pages"""

    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io(truncate_content=True)
    async def describe(self, *, config_id: UUID) -> BusConfigurationView:
        """
        Raises:
            NotFoundError: If the configuration does not exist
        """
        with self.tracer.start_as_current_span(
            'use_case.describe_bus_configuration', attributes={'bus_config.id': str(config_id)}
        ):
            async with self.uow_factory() as uow:
                configuration = await uow.bus_configuration_repo.get_by_id(config_id=config_id)
            if not configuration:
                raise NotFoundError(f'Bus configuration {config_id} not found')
            return BusConfigurationView(configuration=configuration, layout=configuration.seat_map())

    @Logger.io(truncate_content=True)
    async def describe_for_trip(self, *, trip_id: UUID) -> Optional[BusConfigurationView]:
        """
        Returns:
            The trip's bus, or None if the trip has no bus configured yet
        """
        with self.tracer.start_as_current_span(
            'use_case.describe_bus_configuration_for_trip', attributes={'trip.id': str(trip_id)}
        ):
            async with self.uow_factory() as uow:
                configuration = await uow.bus_configuration_repo.get_by_trip_id(trip_id=trip_id)
            if not configuration:
                return None
            return BusConfigurationView(configuration=configuration, layout=configuration.seat_map())
