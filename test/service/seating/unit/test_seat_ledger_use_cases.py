"""
Unit tests for the seat assignment ledger use cases

- AssignSeatUseCase / UnassignSeatUseCase
- ListSeatAssignmentsUseCase: ordering and display names
- GetSeatMapUseCase: unseated participants panel
- OpenClaimLinkUseCase: read-only view of a claim link
"""

from datetime import datetime, timedelta
from uuid import UUID

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import NotFoundError
from src.service.seating.app.command.assign_seat_use_case import AssignSeatUseCase
from src.service.seating.app.command.unassign_seat_use_case import UnassignSeatUseCase
from src.service.seating.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.seating.app.query.list_seat_assignments_use_case import (
    ListSeatAssignmentsUseCase,
)
from src.service.seating.app.query.open_claim_link_use_case import OpenClaimLinkUseCase
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.entity.seat_assignment_entity import (
    AssignmentSource,
    SeatAssignment,
)
from src.service.seating.domain.entity.seat_claim_token_entity import (
    ClaimTokenState,
    SeatClaimToken,
)
from src.service.seating.domain.layout_geometry import StandardLayout
from src.service.seating.domain.seating_errors import (
    SeatConflictError,
    SeatingValidationError,
    TokenInvalidError,
)
from src.service.seating.driven_adapter.memory.static_participant_directory import (
    StaticParticipantDirectory,
)
from test.service.seating.unit.test_helpers import UnitOfWorkMock


@pytest.fixture
def configuration(trip_id: UUID) -> BusConfiguration:
    # 2 * 4 + 3 = 11 seats
    return BusConfiguration.create(
        trip_id=trip_id, geometry=StandardLayout(rows=3, seats_per_row=4, last_row_seats=3)
    )


@pytest.fixture
def uow(configuration: BusConfiguration) -> UnitOfWorkMock:
    uow = UnitOfWorkMock()
    uow.bus_configuration_repo.get_by_id.return_value = configuration
    uow.bus_configuration_repo.get_by_trip_id.return_value = configuration
    uow.seat_assignment_repo.add.side_effect = lambda *, assignment: assignment
    return uow


def _seat(configuration: BusConfiguration, participant_id: UUID, seat: int) -> SeatAssignment:
    return SeatAssignment.create(
        bus_config_id=configuration.id, participant_id=participant_id, seat_number=seat
    )


@pytest.mark.unit
class TestAssignSeatUseCase:
    @pytest.mark.asyncio
    async def test_assign__success(
        self, uow: UnitOfWorkMock, configuration: BusConfiguration, participant_a: UUID
    ) -> None:
        # Arrange
        use_case = AssignSeatUseCase(uow_factory=uow.factory)

        # Act
        assignment = await use_case.assign(
            config_id=configuration.id, participant_id=participant_a, seat_number=11
        )

        # Assert
        assert assignment.seat_number == 11
        assert assignment.bus_config_id == configuration.id
        assert assignment.source == AssignmentSource.STAFF
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('seat_number', [0, 12])
    async def test_assign__out_of_range(
        self,
        uow: UnitOfWorkMock,
        configuration: BusConfiguration,
        participant_a: UUID,
        seat_number: int,
    ) -> None:
        use_case = AssignSeatUseCase(uow_factory=uow.factory)

        with pytest.raises(SeatingValidationError) as exc_info:
            await use_case.assign(
                config_id=configuration.id, participant_id=participant_a, seat_number=seat_number
            )

        assert exc_info.value.status_code == 400
        uow.seat_assignment_repo.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_assign__seat_taken_propagates(
        self, uow: UnitOfWorkMock, configuration: BusConfiguration, participant_b: UUID
    ) -> None:
        # Arrange
        uow.seat_assignment_repo.add.side_effect = SeatConflictError(
            bus_config_id=configuration.id, seat_number=10
        )
        use_case = AssignSeatUseCase(uow_factory=uow.factory)

        # Act & Assert
        with pytest.raises(SeatConflictError) as exc_info:
            await use_case.assign(
                config_id=configuration.id, participant_id=participant_b, seat_number=10
            )

        assert exc_info.value.seat_number == 10
        uow.commit.assert_not_awaited()
        uow.rollback.assert_awaited()

    @pytest.mark.asyncio
    async def test_assign__unknown_configuration(
        self, uow: UnitOfWorkMock, participant_a: UUID
    ) -> None:
        uow.bus_configuration_repo.get_by_id.return_value = None
        use_case = AssignSeatUseCase(uow_factory=uow.factory)

        with pytest.raises(NotFoundError):
            await use_case.assign(config_id=uuid7(), participant_id=participant_a, seat_number=1)


@pytest.mark.unit
class TestUnassignSeatUseCase:
    @pytest.mark.asyncio
    async def test_unassign__returns_removed_assignment(
        self, uow: UnitOfWorkMock, configuration: BusConfiguration, participant_a: UUID
    ) -> None:
        # Arrange
        assignment = _seat(configuration, participant_a, 4)
        uow.seat_assignment_repo.get_by_id.return_value = assignment
        uow.seat_assignment_repo.delete.return_value = True
        use_case = UnassignSeatUseCase(uow_factory=uow.factory)

        # Act
        removed = await use_case.unassign(assignment_id=assignment.id)

        # Assert
        assert removed == assignment
        uow.seat_assignment_repo.delete.assert_awaited_once_with(assignment_id=assignment.id)
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unassign__unknown(self, uow: UnitOfWorkMock) -> None:
        uow.seat_assignment_repo.get_by_id.return_value = None
        use_case = UnassignSeatUseCase(uow_factory=uow.factory)

        with pytest.raises(NotFoundError):
            await use_case.unassign(assignment_id=uuid7())

        uow.commit.assert_not_awaited()


@pytest.mark.unit
class TestSeatingQueries:
    @pytest.mark.asyncio
    async def test_list_by_config__labels_with_display_names(
        self,
        uow: UnitOfWorkMock,
        configuration: BusConfiguration,
        participant_a: UUID,
        participant_b: UUID,
        participant_directory: StaticParticipantDirectory,
    ) -> None:
        # Arrange
        stranger = uuid7()
        uow.seat_assignment_repo.list_by_config.return_value = [
            _seat(configuration, participant_b, 2),
            _seat(configuration, participant_a, 5),
            _seat(configuration, stranger, 9),
        ]
        use_case = ListSeatAssignmentsUseCase(
            uow_factory=uow.factory, participant_directory=participant_directory
        )

        # Act
        occupied = await use_case.list_by_config(config_id=configuration.id)

        # Assert
        assert [(o.seat_number, o.display_name) for o in occupied] == [
            (2, 'Bianchi Anna'),
            (5, 'Rossi Mario'),
            (9, None),
        ]

    @pytest.mark.asyncio
    async def test_available_seats(
        self, uow: UnitOfWorkMock, configuration: BusConfiguration, participant_a: UUID
    ) -> None:
        uow.seat_assignment_repo.list_by_config.return_value = [
            _seat(configuration, participant_a, 1)
        ]
        use_case = ListSeatAssignmentsUseCase(
            uow_factory=uow.factory, participant_directory=StaticParticipantDirectory()
        )

        seats = await use_case.available_seats(config_id=configuration.id)

        assert seats == list(range(2, 12))

    @pytest.mark.asyncio
    async def test_seat_map__lists_unseated_participants_once(
        self,
        uow: UnitOfWorkMock,
        configuration: BusConfiguration,
        participant_a: UUID,
        participant_b: UUID,
        participant_directory: StaticParticipantDirectory,
    ) -> None:
        # Arrange
        third = uuid7()
        uow.seat_assignment_repo.list_by_config.return_value = [
            _seat(configuration, participant_a, 3)
        ]
        use_case = GetSeatMapUseCase(
            uow_factory=uow.factory, participant_directory=participant_directory
        )

        # Act
        view = await use_case.get_seat_map(
            config_id=configuration.id,
            trip_participant_ids=[participant_b, participant_a, third, participant_b],
        )

        # Assert
        assert view.layout.total_seats == 11
        assert [o.display_name for o in view.occupied] == ['Rossi Mario']
        assert 3 not in view.available_seats
        assert view.unseated_participant_ids == [participant_b, third]

    @pytest.mark.asyncio
    async def test_open_link__read_only_view(
        self,
        uow: UnitOfWorkMock,
        configuration: BusConfiguration,
        trip_id: UUID,
        participant_a: UUID,
        participant_b: UUID,
        participant_directory: StaticParticipantDirectory,
        now: datetime,
    ) -> None:
        # Arrange
        token = SeatClaimToken.issue(participant_id=participant_a, trip_id=trip_id, now=now)
        uow.seat_claim_token_repo.get_by_token.return_value = token
        uow.seat_assignment_repo.list_by_config.return_value = [
            _seat(configuration, participant_b, 6)
        ]
        use_case = OpenClaimLinkUseCase(
            uow_factory=uow.factory,
            participant_directory=participant_directory,
            clock=lambda: now + timedelta(days=1),
        )

        # Act
        view = await use_case.open_link(token=token.token)

        # Assert
        assert view.state == ClaimTokenState.ISSUED
        assert view.participant_name == 'Rossi Mario'
        assert view.occupied_seat_numbers == [6]
        assert view.current_seat is None
        assert 6 not in view.available_seats
        uow.seat_claim_token_repo.mark_used.assert_not_awaited()
        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_open_link__expired(
        self, uow: UnitOfWorkMock, trip_id: UUID, participant_a: UUID, now: datetime
    ) -> None:
        token = SeatClaimToken.issue(
            participant_id=participant_a, trip_id=trip_id, ttl=timedelta(hours=1), now=now
        )
        uow.seat_claim_token_repo.get_by_token.return_value = token
        use_case = OpenClaimLinkUseCase(
            uow_factory=uow.factory,
            participant_directory=StaticParticipantDirectory(),
            clock=lambda: now + timedelta(hours=1),
        )

        with pytest.raises(TokenInvalidError):
            await use_case.open_link(token=token.token)
