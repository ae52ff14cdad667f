from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_claim_token_repo import ISeatClaimTokenRepo
from src.service.seating.domain.entity.seat_claim_token_entity import SeatClaimToken
from src.service.seating.driven_adapter.model.seat_claim_token_model import SeatClaimTokenModel
from src.service.seating.driven_adapter.repo.repo_utils import as_utc


class SeatClaimTokenRepoImpl(ISeatClaimTokenRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def add(self, *, token: SeatClaimToken) -> SeatClaimToken:
        self.session.add(
            SeatClaimTokenModel(
                id=token.id,
                token=token.token,
                participant_id=token.participant_id,
                trip_id=token.trip_id,
                expires_at=token.expires_at,
                used_at=token.used_at,
                created_at=token.created_at,
            )
        )
        await self.session.flush()
        return token

    @Logger.io
    async def get_by_token(self, *, token: str) -> Optional[SeatClaimToken]:
        result = await self.session.execute(
            select(SeatClaimTokenModel).where(SeatClaimTokenModel.token == token)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._model_to_entity(model)

    @Logger.io
    async def mark_used(self, *, token_id: UUID, used_at: datetime) -> bool:
        # Conditional update: a consumed token is never touched again
        result = await self.session.execute(
            update(SeatClaimTokenModel)
            .where(SeatClaimTokenModel.id == token_id, SeatClaimTokenModel.used_at.is_(None))
            .values(used_at=used_at)
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    @staticmethod
    def _model_to_entity(model: SeatClaimTokenModel) -> SeatClaimToken:
        return SeatClaimToken(
            id=model.id,
            token=model.token,
            participant_id=model.participant_id,
            trip_id=model.trip_id,
            expires_at=as_utc(model.expires_at),  # type: ignore[arg-type]
            used_at=as_utc(model.used_at),
            created_at=as_utc(model.created_at),
        )
