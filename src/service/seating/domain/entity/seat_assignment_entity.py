from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7


class AssignmentSource(StrEnum):
    STAFF = 'staff'
    SELF_SERVICE = 'self_service'


@attrs.define
class SeatAssignment:
    id: UUID
    bus_config_id: UUID
    participant_id: UUID
    seat_number: int
    source: AssignmentSource = AssignmentSource.STAFF
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        bus_config_id: UUID,
        participant_id: UUID,
        seat_number: int,
        source: AssignmentSource = AssignmentSource.STAFF,
    ) -> 'SeatAssignment':
        return cls(
            id=uuid7(),
            bus_config_id=bus_config_id,
            participant_id=participant_id,
            seat_number=seat_number,
            source=source,
            created_at=datetime.now(timezone.utc),
        )
