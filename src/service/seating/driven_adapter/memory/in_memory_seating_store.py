"""
In-memory Seating Store

Single-process backend for development and tests.

Architecture:
- One store instance (DI singleton) holds every table as a dict
- Two indexes enforce the ledger's one-to-one relation:
  (config_id, seat_number) -> assignment_id and (config_id, participant_id) -> assignment_id
- Writes go through an anyio.Lock so check-and-insert is one atomic step
- Each unit of work keeps an undo journal; leaving without commit replays it in reverse

Visibility: writes are visible to other units of work before commit (read-uncommitted).
The unique indexes are still exact, which is all the ledger relies on.
"""

from typing import Callable, Dict, List, Tuple
from uuid import UUID

import anyio

from src.platform.database.unit_of_work import AbstractSeatingUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.entity.seat_assignment_entity import SeatAssignment
from src.service.seating.domain.entity.seat_claim_token_entity import SeatClaimToken


UndoJournal = List[Callable[[], None]]


class InMemorySeatingStore:
    def __init__(self) -> None:
        self.lock = anyio.Lock()
        self.templates: Dict[UUID, LayoutTemplate] = {}
        self.configurations: Dict[UUID, BusConfiguration] = {}
        self.configuration_by_trip: Dict[UUID, UUID] = {}
        self.assignments: Dict[UUID, SeatAssignment] = {}
        self.seat_index: Dict[Tuple[UUID, int], UUID] = {}
        self.participant_index: Dict[Tuple[UUID, UUID], UUID] = {}
        self.tokens: Dict[str, SeatClaimToken] = {}

    def unit_of_work(self) -> 'InMemorySeatingUnitOfWork':
        return InMemorySeatingUnitOfWork(store=self)


class InMemorySeatingUnitOfWork(AbstractSeatingUnitOfWork):
    def __init__(self, *, store: InMemorySeatingStore) -> None:
        self.store = store
        self.journal: UndoJournal = []

    async def __aenter__(self):
        from src.service.seating.driven_adapter.memory.in_memory_repos import (
            InMemoryBusConfigurationRepo,
            InMemoryLayoutTemplateRepo,
            InMemorySeatAssignmentRepo,
            InMemorySeatClaimTokenRepo,
        )

        self.journal = []
        self.layout_template_repo = InMemoryLayoutTemplateRepo(
            store=self.store, journal=self.journal
        )
        self.bus_configuration_repo = InMemoryBusConfigurationRepo(
            store=self.store, journal=self.journal
        )
        self.seat_assignment_repo = InMemorySeatAssignmentRepo(
            store=self.store, journal=self.journal
        )
        self.seat_claim_token_repo = InMemorySeatClaimTokenRepo(
            store=self.store, journal=self.journal
        )
        return await super().__aenter__()

    async def _commit(self) -> None:
        self.journal.clear()

    async def rollback(self) -> None:
        if not self.journal:
            return
        async with self.store.lock:
            Logger.base.debug(f'↩️ [MEMORY-UOW] Rolling back {len(self.journal)} change(s)')
            while self.journal:
                undo = self.journal.pop()
                undo()
