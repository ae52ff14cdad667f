from typing import Dict, Iterable, Mapping, Optional
from uuid import UUID

from src.service.seating.app.interface.i_participant_directory import IParticipantDirectory


class StaticParticipantDirectory(IParticipantDirectory):
    """Fixed name table, for hosts without a passenger service and for tests"""

    def __init__(self, names: Optional[Mapping[UUID, str]] = None) -> None:
        self._names: Dict[UUID, str] = dict(names or {})

    def register(self, *, participant_id: UUID, display_name: str) -> None:
        self._names[participant_id] = display_name

    async def get_display_names(self, *, participant_ids: Iterable[UUID]) -> Dict[UUID, str]:
        return {pid: self._names[pid] for pid in participant_ids if pid in self._names}
