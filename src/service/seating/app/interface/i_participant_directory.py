"""
Participant Directory Interface

Read-only view of the host application's passenger records. The seating subsystem
only needs display labels for the seat map; it never owns participant data.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable
from uuid import UUID


class IParticipantDirectory(ABC):
    @abstractmethod
    async def get_display_names(self, *, participant_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """
        Resolve display labels for participants

        Args:
            participant_ids: Participants to resolve

        Returns:
            Mapping of participant id to display name; unknown ids are left out
        """
        pass
