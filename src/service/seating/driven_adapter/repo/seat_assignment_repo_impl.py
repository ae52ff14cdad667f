"""
Seat Assignment Repository Implementation (SQLAlchemy)

Insert-or-conflict is delegated to the two unique constraints on `seat_assignment`:
the INSERT either lands or fails with an IntegrityError that names the constraint.
No read-then-write check happens here, so two concurrent writers can never both win.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_assignment_repo import ISeatAssignmentRepo
from src.service.seating.domain.entity.seat_assignment_entity import (
    AssignmentSource,
    SeatAssignment,
)
from src.service.seating.domain.seating_errors import (
    ParticipantAlreadySeatedError,
    SeatConflictError,
)
from src.service.seating.driven_adapter.model.seat_assignment_model import (
    CONFIGURATION_FOREIGN_KEY,
    PARTICIPANT_UNIQUE_CONSTRAINT,
    SEAT_UNIQUE_CONSTRAINT,
    SeatAssignmentModel,
)
from src.service.seating.driven_adapter.repo.repo_utils import as_utc, violates


class SeatAssignmentRepoImpl(ISeatAssignmentRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def add(self, *, assignment: SeatAssignment) -> SeatAssignment:
        self.session.add(
            SeatAssignmentModel(
                id=assignment.id,
                bus_config_id=assignment.bus_config_id,
                participant_id=assignment.participant_id,
                seat_number=assignment.seat_number,
                source=assignment.source.value,
                created_at=assignment.created_at,
            )
        )
        try:
            await self.session.flush()
        except IntegrityError as e:
            if violates(e, SEAT_UNIQUE_CONSTRAINT, 'seat_assignment.seat_number'):
                raise SeatConflictError(
                    bus_config_id=assignment.bus_config_id, seat_number=assignment.seat_number
                ) from e
            if violates(e, PARTICIPANT_UNIQUE_CONSTRAINT, 'seat_assignment.participant_id'):
                raise ParticipantAlreadySeatedError(
                    bus_config_id=assignment.bus_config_id,
                    participant_id=assignment.participant_id,
                ) from e
            if violates(e, CONFIGURATION_FOREIGN_KEY, 'FOREIGN KEY constraint failed'):
                raise NotFoundError(
                    f'Bus configuration {assignment.bus_config_id} not found'
                ) from e
            raise
        return assignment

    @Logger.io
    async def get_by_id(self, *, assignment_id: UUID) -> Optional[SeatAssignment]:
        result = await self.session.execute(
            select(SeatAssignmentModel).where(SeatAssignmentModel.id == assignment_id)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._model_to_entity(model)

    @Logger.io
    async def get_by_participant(
        self, *, bus_config_id: UUID, participant_id: UUID
    ) -> Optional[SeatAssignment]:
        result = await self.session.execute(
            select(SeatAssignmentModel).where(
                SeatAssignmentModel.bus_config_id == bus_config_id,
                SeatAssignmentModel.participant_id == participant_id,
            )
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._model_to_entity(model)

    @Logger.io(truncate_content=True)
    async def list_by_config(self, *, bus_config_id: UUID) -> List[SeatAssignment]:
        result = await self.session.execute(
            select(SeatAssignmentModel)
            .where(SeatAssignmentModel.bus_config_id == bus_config_id)
            .order_by(SeatAssignmentModel.seat_number)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def delete(self, *, assignment_id: UUID) -> bool:
        result = await self.session.execute(
            delete(SeatAssignmentModel).where(SeatAssignmentModel.id == assignment_id)
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    @Logger.io
    async def delete_by_config(self, *, bus_config_id: UUID) -> int:
        result = await self.session.execute(
            delete(SeatAssignmentModel).where(SeatAssignmentModel.bus_config_id == bus_config_id)
        )
        return result.rowcount  # type: ignore[attr-defined]

    @staticmethod
    def _model_to_entity(model: SeatAssignmentModel) -> SeatAssignment:
        return SeatAssignment(
            id=model.id,
            bus_config_id=model.bus_config_id,
            participant_id=model.participant_id,
            seat_number=model.seat_number,
            source=AssignmentSource(model.source),
            created_at=as_utc(model.created_at),
        )
