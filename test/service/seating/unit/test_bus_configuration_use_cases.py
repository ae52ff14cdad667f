"""
Unit tests for bus configuration and template use cases

- CreateBusConfigurationUseCase: input validation, duplicates, template copy
- DeleteBusConfigurationUseCase: assignments removed before the configuration
- SaveConfigurationAsTemplateUseCase: custom template from a trip's bus
- Template create/delete use cases
"""

from unittest.mock import Mock, call
from uuid import UUID

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import NotFoundError
from src.service.seating.app.command.create_bus_configuration_use_case import (
    CreateBusConfigurationUseCase,
)
from src.service.seating.app.command.create_layout_template_use_case import (
    CreateLayoutTemplateUseCase,
)
from src.service.seating.app.command.delete_bus_configuration_use_case import (
    DeleteBusConfigurationUseCase,
)
from src.service.seating.app.command.delete_layout_template_use_case import (
    DeleteLayoutTemplateUseCase,
)
from src.service.seating.app.command.save_configuration_as_template_use_case import (
    SaveConfigurationAsTemplateUseCase,
)
from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.layout_geometry import AsymmetricLayout, StandardLayout
from src.service.seating.domain.seating_errors import (
    ConfigurationAlreadyExistsError,
    LayoutValidationError,
    SeatingValidationError,
)
from test.service.seating.unit.test_helpers import UnitOfWorkMock


@pytest.fixture
def uow() -> UnitOfWorkMock:
    return UnitOfWorkMock()


@pytest.fixture
def template() -> LayoutTemplate:
    return LayoutTemplate.create(
        name='GT 53',
        geometry=StandardLayout(rows=13, seats_per_row=4, last_row_seats=5),
        amenities=BusAmenities(has_wc=True),
    )


@pytest.mark.unit
class TestCreateBusConfigurationUseCase:
    @pytest.mark.asyncio
    async def test_create__from_template(
        self, uow: UnitOfWorkMock, template: LayoutTemplate, trip_id: UUID
    ) -> None:
        # Arrange
        uow.layout_template_repo.get_by_id.return_value = template
        use_case = CreateBusConfigurationUseCase(uow_factory=uow.factory)

        # Act
        configuration = await use_case.create_configuration(
            trip_id=trip_id, template_id=template.id
        )

        # Assert
        assert configuration.trip_id == trip_id
        assert configuration.template_id == template.id
        assert configuration.total_seats == 53
        assert configuration.amenities.has_wc is True
        uow.bus_configuration_repo.add.assert_awaited_once_with(configuration=configuration)
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create__template_amenities_can_be_overridden(
        self, uow: UnitOfWorkMock, template: LayoutTemplate, trip_id: UUID
    ) -> None:
        uow.layout_template_repo.get_by_id.return_value = template
        use_case = CreateBusConfigurationUseCase(uow_factory=uow.factory)

        configuration = await use_case.create_configuration(
            trip_id=trip_id, template_id=template.id, amenities=BusAmenities(has_rear_door=False)
        )

        assert configuration.amenities.has_wc is False
        assert configuration.amenities.has_rear_door is False
        assert configuration.geometry == template.geometry

    @pytest.mark.asyncio
    async def test_create__from_explicit_parameters(
        self, uow: UnitOfWorkMock, trip_id: UUID
    ) -> None:
        use_case = CreateBusConfigurationUseCase(uow_factory=uow.factory)

        configuration = await use_case.create_configuration(
            trip_id=trip_id,
            geometry={
                'family': 'asymmetric',
                'left_rows': 11,
                'right_rows': 10,
                'door_row_position': 6,
                'last_row_seats': 5,
            },
        )

        assert configuration.geometry == AsymmetricLayout(
            left_rows=11, right_rows=10, door_row_position=6, last_row_seats=5
        )
        assert configuration.total_seats == 47
        assert configuration.template_id is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize('with_template,with_geometry', [(False, False), (True, True)])
    async def test_create__requires_exactly_one_source(
        self, uow: UnitOfWorkMock, trip_id: UUID, with_template: bool, with_geometry: bool
    ) -> None:
        use_case = CreateBusConfigurationUseCase(uow_factory=uow.factory)

        with pytest.raises(SeatingValidationError):
            await use_case.create_configuration(
                trip_id=trip_id,
                template_id=uuid7() if with_template else None,
                geometry=StandardLayout(rows=10) if with_geometry else None,
            )

        assert uow.entered == 0

    @pytest.mark.asyncio
    async def test_create__trip_already_configured(
        self, uow: UnitOfWorkMock, trip_id: UUID
    ) -> None:
        # Arrange
        uow.bus_configuration_repo.get_by_trip_id.return_value = BusConfiguration.create(
            trip_id=trip_id, geometry=StandardLayout(rows=10)
        )
        use_case = CreateBusConfigurationUseCase(uow_factory=uow.factory)

        # Act & Assert
        with pytest.raises(ConfigurationAlreadyExistsError) as exc_info:
            await use_case.create_configuration(trip_id=trip_id, geometry=StandardLayout(rows=10))

        assert exc_info.value.status_code == 409
        uow.bus_configuration_repo.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create__unknown_template(self, uow: UnitOfWorkMock, trip_id: UUID) -> None:
        uow.layout_template_repo.get_by_id.return_value = None
        use_case = CreateBusConfigurationUseCase(uow_factory=uow.factory)

        with pytest.raises(NotFoundError):
            await use_case.create_configuration(trip_id=trip_id, template_id=uuid7())

    @pytest.mark.asyncio
    async def test_create__invalid_geometry(self, uow: UnitOfWorkMock, trip_id: UUID) -> None:
        use_case = CreateBusConfigurationUseCase(uow_factory=uow.factory)

        with pytest.raises(LayoutValidationError):
            await use_case.create_configuration(
                trip_id=trip_id, geometry={'rows': 10, 'seats_per_row': 5, 'last_row_seats': 5}
            )

        uow.commit.assert_not_awaited()


@pytest.mark.unit
class TestDeleteBusConfigurationUseCase:
    @pytest.mark.asyncio
    async def test_delete__assignments_go_first(self, uow: UnitOfWorkMock, trip_id: UUID) -> None:
        # Arrange
        configuration = BusConfiguration.create(trip_id=trip_id, geometry=StandardLayout(rows=10))
        uow.bus_configuration_repo.get_by_id.return_value = configuration
        uow.seat_assignment_repo.delete_by_config.return_value = 3

        order = Mock()
        order.attach_mock(uow.seat_assignment_repo.delete_by_config, 'delete_by_config')
        order.attach_mock(uow.bus_configuration_repo.delete, 'delete')
        order.attach_mock(uow.commit, 'commit')

        use_case = DeleteBusConfigurationUseCase(uow_factory=uow.factory)

        # Act
        removed = await use_case.delete_configuration(config_id=configuration.id)

        # Assert
        assert removed == 3
        assert order.mock_calls == [
            call.delete_by_config(bus_config_id=configuration.id),
            call.delete(config_id=configuration.id),
            call.commit(),
        ]

    @pytest.mark.asyncio
    async def test_delete__unknown_configuration(self, uow: UnitOfWorkMock) -> None:
        uow.bus_configuration_repo.get_by_id.return_value = None
        use_case = DeleteBusConfigurationUseCase(uow_factory=uow.factory)

        with pytest.raises(NotFoundError):
            await use_case.delete_configuration(config_id=uuid7())

        uow.seat_assignment_repo.delete_by_config.assert_not_awaited()


@pytest.mark.unit
class TestSaveConfigurationAsTemplateUseCase:
    @pytest.mark.asyncio
    async def test_save__creates_custom_template(self, uow: UnitOfWorkMock, trip_id: UUID) -> None:
        # Arrange
        configuration = BusConfiguration.create(
            trip_id=trip_id,
            geometry=AsymmetricLayout(
                left_rows=9, right_rows=8, door_row_position=4, last_row_seats=6
            ),
        )
        uow.bus_configuration_repo.get_by_id.return_value = configuration
        use_case = SaveConfigurationAsTemplateUseCase(uow_factory=uow.factory)

        # Act
        template = await use_case.save_as_template(
            config_id=configuration.id, name='Setra rear door', description='From the Rome trip'
        )

        # Assert
        assert template.is_custom is True
        assert template.geometry == configuration.geometry
        assert template.total_seats == configuration.total_seats
        uow.layout_template_repo.add.assert_awaited_once_with(template=template)
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save__unknown_configuration(self, uow: UnitOfWorkMock) -> None:
        uow.bus_configuration_repo.get_by_id.return_value = None
        use_case = SaveConfigurationAsTemplateUseCase(uow_factory=uow.factory)

        with pytest.raises(NotFoundError):
            await use_case.save_as_template(config_id=uuid7(), name='Copy')


@pytest.mark.unit
class TestLayoutTemplateUseCases:
    @pytest.mark.asyncio
    async def test_create_template__total_seats_from_generator(self, uow: UnitOfWorkMock) -> None:
        use_case = CreateLayoutTemplateUseCase(uow_factory=uow.factory)

        template = await use_case.create_template(
            name='Midi', geometry={'rows': 9, 'seats_per_row': 4, 'last_row_seats': 3}
        )

        assert template.total_seats == 35
        uow.layout_template_repo.add.assert_awaited_once_with(template=template)
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_template_from_preset(self, uow: UnitOfWorkMock) -> None:
        use_case = CreateLayoutTemplateUseCase(uow_factory=uow.factory)

        template = await use_case.create_template_from_preset(
            label='minibus 19 posti', name='Our minibus'
        )

        assert template.name == 'Our minibus'
        assert template.total_seats == 4 * 4 + 3
        assert template.amenities.has_rear_door is False
        assert template.is_custom is False

    @pytest.mark.asyncio
    async def test_create_template_from_unknown_preset(self, uow: UnitOfWorkMock) -> None:
        use_case = CreateLayoutTemplateUseCase(uow_factory=uow.factory)

        with pytest.raises(NotFoundError):
            await use_case.create_template_from_preset(label='Hovercraft')

        uow.layout_template_repo.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_template(self, uow: UnitOfWorkMock) -> None:
        uow.layout_template_repo.delete.return_value = True
        use_case = DeleteLayoutTemplateUseCase(uow_factory=uow.factory)
        template_id = uuid7()

        await use_case.delete_template(template_id=template_id)

        uow.layout_template_repo.delete.assert_awaited_once_with(template_id=template_id)
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_unknown_template(self, uow: UnitOfWorkMock) -> None:
        uow.layout_template_repo.delete.return_value = False
        use_case = DeleteLayoutTemplateUseCase(uow_factory=uow.factory)

        with pytest.raises(NotFoundError):
            await use_case.delete_template(template_id=uuid7())

        uow.commit.assert_not_awaited()
