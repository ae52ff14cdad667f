from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class DeleteBusConfigurationUseCase:
    """
    Remove a trip's bus together with every seat assignment on it

    Assignments go first, then the configuration, in one unit of work: a failure
    between the two steps leaves nothing half-deleted.
    """

    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def delete_configuration(self, *, config_id: UUID) -> int:
        """
        Returns:
            Number of seat assignments removed

        Raises:
            NotFoundError: If the configuration does not exist
        """
        with self.tracer.start_as_current_span(
            'use_case.delete_bus_configuration', attributes={'bus_config.id': str(config_id)}
        ):
            async with self.uow_factory() as uow:
                configuration = await uow.bus_configuration_repo.get_by_id(config_id=config_id)
                if not configuration:
                    raise NotFoundError(f'Bus configuration {config_id} not found')

                removed = await uow.seat_assignment_repo.delete_by_config(bus_config_id=config_id)
                await uow.bus_configuration_repo.delete(config_id=config_id)
                await uow.commit()

            Logger.base.info(
                f'🗑️ [BUS-CONFIG] Deleted configuration {config_id} of trip '
                f'{configuration.trip_id} ({removed} seat assignment(s) removed)'
            )
            return removed
