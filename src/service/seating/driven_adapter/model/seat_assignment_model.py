from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


SEAT_UNIQUE_CONSTRAINT = 'uq_seat_assignment_config_seat'
PARTICIPANT_UNIQUE_CONSTRAINT = 'uq_seat_assignment_config_participant'
CONFIGURATION_FOREIGN_KEY = 'fk_seat_assignment_bus_configuration'


class SeatAssignmentModel(Base):
    __tablename__ = 'seat_assignment'
    __table_args__ = (
        # One passenger per seat, one seat per passenger
        UniqueConstraint('bus_config_id', 'seat_number', name=SEAT_UNIQUE_CONSTRAINT),
        UniqueConstraint('bus_config_id', 'participant_id', name=PARTICIPANT_UNIQUE_CONSTRAINT),
        CheckConstraint('seat_number >= 1', name='ck_seat_assignment_seat_positive'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    bus_config_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey('bus_configuration.id', ondelete='CASCADE', name=CONFIGURATION_FOREIGN_KEY),
        nullable=False,
        index=True,
    )
    participant_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[str] = mapped_column(String(20), default='staff', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return (
            f'<SeatAssignmentModel(config={self.bus_config_id}, seat={self.seat_number}, '
            f'participant={self.participant_id})>'
        )
