"""Application layer DTOs"""

from src.service.seating.app.dto.seating_dto import (
    BusConfigurationView,
    ClaimLinkView,
    ClaimSeatResult,
    ClaimStatus,
    OccupiedSeat,
    SeatMapView,
)

__all__ = [
    'BusConfigurationView',
    'ClaimLinkView',
    'ClaimSeatResult',
    'ClaimStatus',
    'OccupiedSeat',
    'SeatMapView',
]
