"""
Dependency wiring

With SEATING_STORE_BACKEND=memory (set in conftest) the container hands every use
case an in-memory unit of work; the participant directory comes from the host.
"""

from typing import Generator
from uuid import UUID

from dependency_injector import errors, providers
import pytest

from src.platform.config.core_setting import StoreBackend
from src.platform.config.di import Container
from src.service.seating.domain.layout_geometry import StandardLayout
from src.service.seating.driven_adapter.memory.in_memory_seating_store import (
    InMemorySeatingStore,
    InMemorySeatingUnitOfWork,
)
from src.service.seating.driven_adapter.memory.static_participant_directory import (
    StaticParticipantDirectory,
)


@pytest.fixture
def container(
    participant_directory: StaticParticipantDirectory,
) -> Generator[Container, None, None]:
    container = Container()
    with container.participant_directory.override(providers.Object(participant_directory)):
        yield container
    container.reset_singletons()


@pytest.mark.integration
class TestSeatingContainer:
    def test_memory_backend_selected(self, container: Container) -> None:
        assert container.config_service().SEATING_STORE_BACKEND == StoreBackend.MEMORY

        first = container.seating_uow()
        second = container.seating_uow()

        assert isinstance(first, InMemorySeatingUnitOfWork)
        assert first is not second
        assert first.store is second.store is container.memory_store()

    def test_participant_directory_is_required(self) -> None:
        bare = Container()

        with pytest.raises(errors.Error):
            bare.list_seat_assignments_use_case()

    @pytest.mark.asyncio
    async def test_use_cases_share_one_store(
        self, container: Container, trip_id: UUID, participant_a: UUID
    ) -> None:
        # Arrange
        create = container.create_bus_configuration_use_case()
        assign = container.assign_seat_use_case()
        seat_map = container.get_seat_map_use_case()

        # Act
        configuration = await create.create_configuration(
            trip_id=trip_id, geometry=StandardLayout(rows=12, seats_per_row=4, last_row_seats=5)
        )
        await assign.assign(config_id=configuration.id, participant_id=participant_a, seat_number=1)
        view = await seat_map.get_seat_map(
            config_id=configuration.id, trip_participant_ids=[participant_a]
        )

        # Assert
        store: InMemorySeatingStore = container.memory_store()
        assert len(store.assignments) == 1
        assert [o.display_name for o in view.occupied] == ['Rossi Mario']
        assert view.unseated_participant_ids == []
        assert view.layout.total_seats == 49
