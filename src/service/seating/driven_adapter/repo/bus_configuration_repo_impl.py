from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_bus_configuration_repo import IBusConfigurationRepo
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.seating_errors import ConfigurationAlreadyExistsError
from src.service.seating.driven_adapter.model.bus_configuration_model import (
    BusConfigurationModel,
)
from src.service.seating.driven_adapter.repo.repo_utils import as_utc, violates


class BusConfigurationRepoImpl(IBusConfigurationRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def add(self, *, configuration: BusConfiguration) -> BusConfiguration:
        model = BusConfigurationModel(
            id=configuration.id,
            trip_id=configuration.trip_id,
            template_id=configuration.template_id,
            carrier_id=configuration.carrier_id,
            created_at=configuration.created_at,
            **BusConfigurationModel.layout_columns(
                configuration.geometry, configuration.amenities
            ),
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if violates(e, 'uq_bus_configuration_trip', 'bus_configuration.trip_id'):
                raise ConfigurationAlreadyExistsError(trip_id=configuration.trip_id) from e
            raise
        return configuration

    @Logger.io
    async def get_by_id(self, *, config_id: UUID) -> Optional[BusConfiguration]:
        result = await self.session.execute(
            select(BusConfigurationModel).where(BusConfigurationModel.id == config_id)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._model_to_entity(model)

    @Logger.io
    async def get_by_trip_id(self, *, trip_id: UUID) -> Optional[BusConfiguration]:
        result = await self.session.execute(
            select(BusConfigurationModel).where(BusConfigurationModel.trip_id == trip_id)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._model_to_entity(model)

    @Logger.io
    async def delete(self, *, config_id: UUID) -> bool:
        result = await self.session.execute(
            delete(BusConfigurationModel).where(BusConfigurationModel.id == config_id)
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    @staticmethod
    def _model_to_entity(model: BusConfigurationModel) -> BusConfiguration:
        return BusConfiguration(
            id=model.id,
            trip_id=model.trip_id,
            geometry=model.to_geometry(),
            amenities=model.to_amenities(),
            total_seats=model.total_seats,
            template_id=model.template_id,
            carrier_id=model.carrier_id,
            created_at=as_utc(model.created_at),
        )
