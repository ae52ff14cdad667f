from typing import Any, Mapping, Optional
from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.layout_geometry import LayoutGeometry, as_geometry
from src.service.seating.domain.seating_errors import (
    ConfigurationAlreadyExistsError,
    SeatingValidationError,
)


class CreateBusConfigurationUseCase:
    """
    Configure the bus of a trip, from a stored template or from explicit parameters

    Flow:
    1. Reject a trip that already has a configuration
    2. Resolve geometry (template copy or explicit parameters)
    3. Store; the trip_id unique index settles two concurrent creations
    """

    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def create_configuration(
        self,
        *,
        trip_id: UUID,
        template_id: Optional[UUID] = None,
        geometry: Optional[LayoutGeometry | Mapping[str, Any]] = None,
        amenities: Optional[BusAmenities] = None,
        carrier_id: Optional[UUID] = None,
    ) -> BusConfiguration:
        """
        Args:
            trip_id: Trip to configure
            template_id: Copy geometry and amenities from this template
            geometry: Explicit layout parameters (mutually exclusive with template_id)
            amenities: Explicit amenities; overrides the template's when both are given
            carrier_id: Coach company operating the bus

        Returns:
            The new configuration

        Raises:
            SeatingValidationError: Neither or both of template_id and geometry given
            NotFoundError: Unknown template
            ConfigurationAlreadyExistsError: The trip already has a bus
        """
        if (template_id is None) == (geometry is None):
            raise SeatingValidationError('Provide exactly one of template_id or geometry')

        with self.tracer.start_as_current_span(
            'use_case.create_bus_configuration',
            attributes={
                'trip.id': str(trip_id),
                'template.id': str(template_id) if template_id else '',
            },
        ):
            async with self.uow_factory() as uow:
                if await uow.bus_configuration_repo.get_by_trip_id(trip_id=trip_id):
                    raise ConfigurationAlreadyExistsError(trip_id=trip_id)

                if template_id is not None:
                    template = await uow.layout_template_repo.get_by_id(template_id=template_id)
                    if not template:
                        raise NotFoundError(f'Bus type {template_id} not found')
                    configuration = BusConfiguration.from_template(
                        trip_id=trip_id, template=template, carrier_id=carrier_id
                    )
                    if amenities is not None:
                        configuration.amenities = amenities
                else:
                    configuration = BusConfiguration.create(
                        trip_id=trip_id,
                        geometry=as_geometry(geometry),  # type: ignore[arg-type]
                        amenities=amenities,
                        carrier_id=carrier_id,
                    )

                await uow.bus_configuration_repo.add(configuration=configuration)
                await uow.commit()

            Logger.base.info(
                f'🚌 [BUS-CONFIG] Trip {trip_id} configured with {configuration.total_seats} seats '
                f'(config={configuration.id})'
            )
            return configuration
