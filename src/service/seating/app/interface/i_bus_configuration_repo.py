from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration


class IBusConfigurationRepo(ABC):
    """Repository interface for per-trip bus configurations"""

    @abstractmethod
    async def add(self, *, configuration: BusConfiguration) -> BusConfiguration:
        """
        Store a new configuration

        Raises:
            ConfigurationAlreadyExistsError: If the trip already has a configuration
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, config_id: UUID) -> Optional[BusConfiguration]:
        pass

    @abstractmethod
    async def get_by_trip_id(self, *, trip_id: UUID) -> Optional[BusConfiguration]:
        pass

    @abstractmethod
    async def delete(self, *, config_id: UUID) -> bool:
        """Remove the configuration row only; assignments are removed by the caller first"""
        pass
