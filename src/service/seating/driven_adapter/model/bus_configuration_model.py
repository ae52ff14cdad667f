from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base
from src.service.seating.driven_adapter.model.layout_columns import LayoutColumnsMixin


class BusConfigurationModel(LayoutColumnsMixin, Base):
    __tablename__ = 'bus_configuration'
    __table_args__ = (UniqueConstraint('trip_id', name='uq_bus_configuration_trip'),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    trip_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    # Informational only, no FK: deleting a template must not touch configurations
    template_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    carrier_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<BusConfigurationModel(id={self.id}, trip_id={self.trip_id}, total_seats={self.total_seats})>'
