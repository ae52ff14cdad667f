from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.seating.domain.entity.seat_assignment_entity import SeatAssignment


class ISeatAssignmentRepo(ABC):
    """
    Seat Assignment Ledger

    The ledger keeps seats and participants in a one-to-one relation per configuration.
    `add` is the only write path for new assignments and is an insert-or-conflict:
    implementations must decide conflicts atomically, never by a read followed by a write.
    """

    @abstractmethod
    async def add(self, *, assignment: SeatAssignment) -> SeatAssignment:
        """
        Insert an assignment unless the seat or the participant is already taken

        Args:
            assignment: New assignment, seat range already validated by the caller

        Returns:
            The stored assignment

        Raises:
            SeatConflictError: The seat already holds another participant
            ParticipantAlreadySeatedError: The participant already holds a seat
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, assignment_id: UUID) -> Optional[SeatAssignment]:
        pass

    @abstractmethod
    async def get_by_participant(
        self, *, bus_config_id: UUID, participant_id: UUID
    ) -> Optional[SeatAssignment]:
        pass

    @abstractmethod
    async def list_by_config(self, *, bus_config_id: UUID) -> List[SeatAssignment]:
        """All assignments of a configuration ordered by seat number"""
        pass

    @abstractmethod
    async def delete(self, *, assignment_id: UUID) -> bool:
        pass

    @abstractmethod
    async def delete_by_config(self, *, bus_config_id: UUID) -> int:
        """
        Remove every assignment of a configuration

        Returns:
            Number of removed assignments
        """
        pass
