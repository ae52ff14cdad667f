from datetime import datetime, timedelta, timezone
from enum import StrEnum
import secrets
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7


DEFAULT_CLAIM_TOKEN_TTL = timedelta(days=7)


class ClaimTokenState(StrEnum):
    ISSUED = 'issued'
    CONSUMED = 'consumed'
    EXPIRED = 'expired'


@attrs.define
class SeatClaimToken:
    """
    Single-use, time-boxed link that lets one participant pick their own seat.

    State is derived, never stored: expiry wins over consumption, and a consumed
    token never returns to ISSUED.
    """

    id: UUID
    token: str
    participant_id: UUID
    trip_id: UUID
    expires_at: datetime
    used_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def issue(
        cls,
        *,
        participant_id: UUID,
        trip_id: UUID,
        ttl: timedelta = DEFAULT_CLAIM_TOKEN_TTL,
        now: Optional[datetime] = None,
    ) -> 'SeatClaimToken':
        now = now or datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            token=secrets.token_urlsafe(32),
            participant_id=participant_id,
            trip_id=trip_id,
            expires_at=now + ttl,
            created_at=now,
        )

    def state_at(self, now: datetime) -> ClaimTokenState:
        if now >= self.expires_at:
            return ClaimTokenState.EXPIRED
        if self.used_at is not None:
            return ClaimTokenState.CONSUMED
        return ClaimTokenState.ISSUED

    def mark_used(self, now: datetime) -> 'SeatClaimToken':
        return attrs.evolve(self, used_at=now)
