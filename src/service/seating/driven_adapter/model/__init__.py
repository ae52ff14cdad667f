"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.seating.driven_adapter.model.bus_configuration_model import (
    BusConfigurationModel,
)
from src.service.seating.driven_adapter.model.layout_template_model import LayoutTemplateModel
from src.service.seating.driven_adapter.model.seat_assignment_model import SeatAssignmentModel
from src.service.seating.driven_adapter.model.seat_claim_token_model import SeatClaimTokenModel

__all__ = [
    'BusConfigurationModel',
    'LayoutTemplateModel',
    'SeatAssignmentModel',
    'SeatClaimTokenModel',
]
