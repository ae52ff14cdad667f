from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class SeatClaimTokenModel(Base):
    __tablename__ = 'seat_claim_token'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    token: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    participant_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    trip_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    used_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<SeatClaimTokenModel(id={self.id}, participant_id={self.participant_id})>'
