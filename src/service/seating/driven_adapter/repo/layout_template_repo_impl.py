from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_layout_template_repo import ILayoutTemplateRepo
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.layout_presets import LayoutType
from src.service.seating.driven_adapter.model.layout_template_model import LayoutTemplateModel
from src.service.seating.driven_adapter.repo.repo_utils import as_utc


class LayoutTemplateRepoImpl(ILayoutTemplateRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def add(self, *, template: LayoutTemplate) -> LayoutTemplate:
        model = LayoutTemplateModel(
            id=template.id,
            name=template.name,
            is_custom=template.is_custom,
            layout_type=template.layout_type.value,
            length_meters=template.length_meters,
            description=template.description,
            created_at=template.created_at,
            **LayoutTemplateModel.layout_columns(template.geometry, template.amenities),
        )
        self.session.add(model)
        await self.session.flush()
        return template

    @Logger.io
    async def get_by_id(self, *, template_id: UUID) -> Optional[LayoutTemplate]:
        result = await self.session.execute(
            select(LayoutTemplateModel).where(LayoutTemplateModel.id == template_id)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return self._model_to_entity(model)

    @Logger.io(truncate_content=True)
    async def list_all(self) -> List[LayoutTemplate]:
        result = await self.session.execute(
            select(LayoutTemplateModel).order_by(LayoutTemplateModel.name, LayoutTemplateModel.id)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def delete(self, *, template_id: UUID) -> bool:
        result = await self.session.execute(
            delete(LayoutTemplateModel).where(LayoutTemplateModel.id == template_id)
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    @staticmethod
    def _model_to_entity(model: LayoutTemplateModel) -> LayoutTemplate:
        return LayoutTemplate(
            id=model.id,
            name=model.name,
            geometry=model.to_geometry(),
            amenities=model.to_amenities(),
            total_seats=model.total_seats,
            is_custom=model.is_custom,
            layout_type=LayoutType(model.layout_type),
            length_meters=model.length_meters,
            description=model.description,
            created_at=as_utc(model.created_at),
        )
