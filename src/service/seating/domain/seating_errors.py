"""
Seating error taxonomy

Layout/validation errors never reach the ledger. Ledger errors are distinguishable by
type so callers can treat SeatConflictError as retry-eligible and everything else as
a failed request.
"""

from uuid import UUID

from src.platform.exception.exceptions import ConflictError, DomainError, GoneError


class LayoutValidationError(DomainError):
    """Invalid geometry parameters"""


class SeatingValidationError(DomainError):
    """Invalid ledger input, e.g. a seat number outside [1, total_seats]"""


class SeatConflictError(ConflictError):
    """The seat already holds a passenger - expected under concurrency, caller reloads and retries"""

    def __init__(self, *, bus_config_id: UUID, seat_number: int) -> None:
        self.bus_config_id = bus_config_id
        self.seat_number = seat_number
        super().__init__(f'Seat {seat_number} is already taken')


class ParticipantAlreadySeatedError(ConflictError):
    """The participant already holds a seat in this configuration - unassign first"""

    def __init__(self, *, bus_config_id: UUID, participant_id: UUID) -> None:
        self.bus_config_id = bus_config_id
        self.participant_id = participant_id
        super().__init__(f'Participant {participant_id} already has a seat on this bus')


class ConfigurationAlreadyExistsError(ConflictError):
    def __init__(self, *, trip_id: UUID) -> None:
        self.trip_id = trip_id
        super().__init__(f'Trip {trip_id} already has a bus configuration')


class TokenInvalidError(GoneError):
    """Unknown, expired or already consumed claim link - terminal for that token"""

    def __init__(self, message: str = 'Invalid or expired link') -> None:
        super().__init__(message)
