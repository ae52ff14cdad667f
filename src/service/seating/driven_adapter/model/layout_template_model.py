from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Float, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base
from src.service.seating.driven_adapter.model.layout_columns import LayoutColumnsMixin


class LayoutTemplateModel(LayoutColumnsMixin, Base):
    __tablename__ = 'layout_template'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    layout_type: Mapped[str] = mapped_column(String(30), default='gt_standard', nullable=False)
    length_meters: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<LayoutTemplateModel(id={self.id}, name={self.name}, total_seats={self.total_seats})>'
