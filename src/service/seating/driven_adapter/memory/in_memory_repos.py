from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_bus_configuration_repo import IBusConfigurationRepo
from src.service.seating.app.interface.i_layout_template_repo import ILayoutTemplateRepo
from src.service.seating.app.interface.i_seat_assignment_repo import ISeatAssignmentRepo
from src.service.seating.app.interface.i_seat_claim_token_repo import ISeatClaimTokenRepo
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.entity.seat_assignment_entity import SeatAssignment
from src.service.seating.domain.entity.seat_claim_token_entity import SeatClaimToken
from src.service.seating.domain.seating_errors import (
    ConfigurationAlreadyExistsError,
    ParticipantAlreadySeatedError,
    SeatConflictError,
)
from src.service.seating.driven_adapter.memory.in_memory_seating_store import (
    InMemorySeatingStore,
    UndoJournal,
)


class _InMemoryRepo:
    def __init__(self, *, store: InMemorySeatingStore, journal: UndoJournal) -> None:
        self.store = store
        self.journal = journal


def _unindex_assignment(store: InMemorySeatingStore, assignment: SeatAssignment) -> None:
    store.assignments.pop(assignment.id, None)
    store.seat_index.pop((assignment.bus_config_id, assignment.seat_number), None)
    store.participant_index.pop((assignment.bus_config_id, assignment.participant_id), None)


def _index_assignment(store: InMemorySeatingStore, assignment: SeatAssignment) -> None:
    store.assignments[assignment.id] = assignment
    store.seat_index[(assignment.bus_config_id, assignment.seat_number)] = assignment.id
    store.participant_index[(assignment.bus_config_id, assignment.participant_id)] = assignment.id


class InMemoryLayoutTemplateRepo(_InMemoryRepo, ILayoutTemplateRepo):
    @Logger.io
    async def add(self, *, template: LayoutTemplate) -> LayoutTemplate:
        async with self.store.lock:
            self.store.templates[template.id] = template
            self.journal.append(lambda: self.store.templates.pop(template.id, None))
        return template

    async def get_by_id(self, *, template_id: UUID) -> Optional[LayoutTemplate]:
        return self.store.templates.get(template_id)

    async def list_all(self) -> List[LayoutTemplate]:
        return sorted(self.store.templates.values(), key=lambda t: (t.name, str(t.id)))

    @Logger.io
    async def delete(self, *, template_id: UUID) -> bool:
        async with self.store.lock:
            removed = self.store.templates.pop(template_id, None)
            if removed is None:
                return False
            self.journal.append(lambda: self.store.templates.setdefault(removed.id, removed))
        return True


class InMemoryBusConfigurationRepo(_InMemoryRepo, IBusConfigurationRepo):
    @Logger.io
    async def add(self, *, configuration: BusConfiguration) -> BusConfiguration:
        store = self.store
        async with store.lock:
            if configuration.trip_id in store.configuration_by_trip:
                raise ConfigurationAlreadyExistsError(trip_id=configuration.trip_id)
            store.configurations[configuration.id] = configuration
            store.configuration_by_trip[configuration.trip_id] = configuration.id

            def undo() -> None:
                store.configurations.pop(configuration.id, None)
                store.configuration_by_trip.pop(configuration.trip_id, None)

            self.journal.append(undo)
        return configuration

    async def get_by_id(self, *, config_id: UUID) -> Optional[BusConfiguration]:
        return self.store.configurations.get(config_id)

    async def get_by_trip_id(self, *, trip_id: UUID) -> Optional[BusConfiguration]:
        config_id = self.store.configuration_by_trip.get(trip_id)
        return self.store.configurations.get(config_id) if config_id else None

    @Logger.io
    async def delete(self, *, config_id: UUID) -> bool:
        store = self.store
        async with store.lock:
            removed = store.configurations.pop(config_id, None)
            if removed is None:
                return False
            store.configuration_by_trip.pop(removed.trip_id, None)
            # ON DELETE CASCADE: assignments that landed after delete_by_config go too
            orphans = [a for a in store.assignments.values() if a.bus_config_id == config_id]
            for assignment in orphans:
                _unindex_assignment(store, assignment)

            def undo() -> None:
                store.configurations[removed.id] = removed
                store.configuration_by_trip[removed.trip_id] = removed.id
                for assignment in orphans:
                    _index_assignment(store, assignment)

            self.journal.append(undo)
        return True


class InMemorySeatAssignmentRepo(_InMemoryRepo, ISeatAssignmentRepo):
    def _remove(self, assignment: SeatAssignment) -> None:
        _unindex_assignment(self.store, assignment)

    def _insert(self, assignment: SeatAssignment) -> None:
        _index_assignment(self.store, assignment)

    @Logger.io
    async def add(self, *, assignment: SeatAssignment) -> SeatAssignment:
        store = self.store
        async with store.lock:
            # Foreign key: the parent may have been deleted since the caller read it
            if assignment.bus_config_id not in store.configurations:
                raise NotFoundError(f'Bus configuration {assignment.bus_config_id} not found')
            # Compare-and-set: both indexes are checked and written under the same lock
            if (assignment.bus_config_id, assignment.seat_number) in store.seat_index:
                raise SeatConflictError(
                    bus_config_id=assignment.bus_config_id, seat_number=assignment.seat_number
                )
            if (assignment.bus_config_id, assignment.participant_id) in store.participant_index:
                raise ParticipantAlreadySeatedError(
                    bus_config_id=assignment.bus_config_id,
                    participant_id=assignment.participant_id,
                )
            self._insert(assignment)
            self.journal.append(lambda: self._remove(assignment))
        return assignment

    async def get_by_id(self, *, assignment_id: UUID) -> Optional[SeatAssignment]:
        return self.store.assignments.get(assignment_id)

    async def get_by_participant(
        self, *, bus_config_id: UUID, participant_id: UUID
    ) -> Optional[SeatAssignment]:
        assignment_id = self.store.participant_index.get((bus_config_id, participant_id))
        return self.store.assignments.get(assignment_id) if assignment_id else None

    async def list_by_config(self, *, bus_config_id: UUID) -> List[SeatAssignment]:
        return sorted(
            (a for a in self.store.assignments.values() if a.bus_config_id == bus_config_id),
            key=lambda a: a.seat_number,
        )

    @Logger.io
    async def delete(self, *, assignment_id: UUID) -> bool:
        async with self.store.lock:
            assignment = self.store.assignments.get(assignment_id)
            if assignment is None:
                return False
            self._remove(assignment)
            self.journal.append(lambda: self._insert(assignment))
        return True

    @Logger.io
    async def delete_by_config(self, *, bus_config_id: UUID) -> int:
        async with self.store.lock:
            removed = [
                a for a in self.store.assignments.values() if a.bus_config_id == bus_config_id
            ]
            for assignment in removed:
                self._remove(assignment)

            def undo() -> None:
                for assignment in removed:
                    self._insert(assignment)

            self.journal.append(undo)
        return len(removed)


class InMemorySeatClaimTokenRepo(_InMemoryRepo, ISeatClaimTokenRepo):
    @Logger.io
    async def add(self, *, token: SeatClaimToken) -> SeatClaimToken:
        async with self.store.lock:
            self.store.tokens[token.token] = token
            self.journal.append(lambda: self.store.tokens.pop(token.token, None))
        return token

    async def get_by_token(self, *, token: str) -> Optional[SeatClaimToken]:
        return self.store.tokens.get(token)

    @Logger.io
    async def mark_used(self, *, token_id: UUID, used_at: datetime) -> bool:
        store = self.store
        async with store.lock:
            current = next((t for t in store.tokens.values() if t.id == token_id), None)
            if current is None or current.used_at is not None:
                return False
            store.tokens[current.token] = current.mark_used(used_at)

            def undo() -> None:
                store.tokens[current.token] = current

            self.journal.append(undo)
        return True
