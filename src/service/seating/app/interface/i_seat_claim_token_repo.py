from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.service.seating.domain.entity.seat_claim_token_entity import SeatClaimToken


class ISeatClaimTokenRepo(ABC):
    """
    Claim token storage

    Tokens are issued by the host application; `add` exists so it can store them.
    """

    @abstractmethod
    async def add(self, *, token: SeatClaimToken) -> SeatClaimToken:
        pass

    @abstractmethod
    async def get_by_token(self, *, token: str) -> Optional[SeatClaimToken]:
        pass

    @abstractmethod
    async def mark_used(self, *, token_id: UUID, used_at: datetime) -> bool:
        """
        Consume a token, only if it has not been consumed yet

        Returns:
            True if this call consumed the token, False if it was already consumed
        """
        pass
