"""
Unit tests for LayoutTemplate and BusConfiguration

Focus:
1. total_seats is always stamped from the layout generator
2. Template field validation
3. Configurations copy geometry from templates
4. Seat range checks and available seats
"""

import pytest
from uuid_utils.compat import uuid7

from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.layout_geometry import AsymmetricLayout, StandardLayout
from src.service.seating.domain.layout_presets import LayoutType, find_preset
from src.service.seating.domain.seating_errors import SeatingValidationError


@pytest.fixture
def gt_geometry() -> StandardLayout:
    return StandardLayout(rows=13, seats_per_row=4, last_row_seats=5)


@pytest.mark.unit
class TestLayoutTemplate:
    def test_create__stamps_total_seats(self, gt_geometry: StandardLayout) -> None:
        # Act
        template = LayoutTemplate.create(name='  GT Volvo 9700  ', geometry=gt_geometry)

        # Assert
        assert template.name == 'GT Volvo 9700'
        assert template.total_seats == 53
        assert template.is_custom is False
        assert template.layout_type == LayoutType.GT_STANDARD
        assert template.amenities == BusAmenities()
        assert template.created_at is not None

    @pytest.mark.parametrize('name', ['', ' ', 'A', '  B  '])
    def test_create__rejects_short_names(self, gt_geometry: StandardLayout, name: str) -> None:
        with pytest.raises(SeatingValidationError):
            LayoutTemplate.create(name=name, geometry=gt_geometry)

    @pytest.mark.parametrize('length_meters', [5.9, 18.5, 0])
    def test_create__rejects_length_out_of_range(
        self, gt_geometry: StandardLayout, length_meters: float
    ) -> None:
        with pytest.raises(SeatingValidationError):
            LayoutTemplate.create(name='Coach', geometry=gt_geometry, length_meters=length_meters)

    def test_create__rejects_unknown_layout_type(self, gt_geometry: StandardLayout) -> None:
        with pytest.raises(SeatingValidationError):
            LayoutTemplate.create(name='Coach', geometry=gt_geometry, layout_type='tram')

    def test_create__accepts_layout_type_string(self, gt_geometry: StandardLayout) -> None:
        template = LayoutTemplate.create(
            name='Coach', geometry=gt_geometry, layout_type='double_decker', length_meters=14
        )

        assert template.layout_type == LayoutType.DOUBLE_DECKER
        assert template.length_meters == 14

    def test_from_preset__copies_catalog_entry(self) -> None:
        # Arrange
        preset = find_preset('GT 50 posti VIP (WC)')
        assert preset is not None

        # Act
        template = LayoutTemplate.from_preset(preset)

        # Assert
        assert template.name == preset.label
        assert template.geometry == preset.geometry
        assert template.amenities.has_wc is True
        assert template.total_seats == preset.total_seats
        assert template.length_meters == preset.length_meters


@pytest.mark.unit
class TestBusConfiguration:
    def test_from_template__copies_geometry(self) -> None:
        # Arrange
        template = LayoutTemplate.create(
            name='Setra',
            geometry=AsymmetricLayout(
                left_rows=11, right_rows=10, door_row_position=6, last_row_seats=5
            ),
            amenities=BusAmenities(has_wc=True),
        )
        trip_id = uuid7()

        # Act
        configuration = BusConfiguration.from_template(trip_id=trip_id, template=template)

        # Assert
        assert configuration.trip_id == trip_id
        assert configuration.template_id == template.id
        assert configuration.geometry == template.geometry
        assert configuration.amenities == template.amenities
        assert configuration.total_seats == 47
        assert configuration.seat_map().total_seats == 47

    def test_ensure_seat_in_range(self, gt_geometry: StandardLayout) -> None:
        configuration = BusConfiguration.create(trip_id=uuid7(), geometry=gt_geometry)

        configuration.ensure_seat_in_range(1)
        configuration.ensure_seat_in_range(53)

        for bad in (0, 54, -1, True, '5', 5.0):
            with pytest.raises(SeatingValidationError):
                configuration.ensure_seat_in_range(bad)  # type: ignore[arg-type]

    def test_available_seats__excludes_occupied(self) -> None:
        configuration = BusConfiguration.create(
            trip_id=uuid7(), geometry=StandardLayout(rows=2, seats_per_row=2, last_row_seats=3)
        )

        assert configuration.available_seats([]) == [1, 2, 3, 4, 5]
        assert configuration.available_seats([2, 4]) == [1, 3, 5]
