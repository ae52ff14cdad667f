from typing import List, Tuple

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.layout_presets import LAYOUT_PRESETS, LayoutPreset


class ListLayoutTemplatesUseCase:
    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io(truncate_content=True)
    async def list_templates(self) -> List[LayoutTemplate]:
        """Stored templates ordered by name"""
        with self.tracer.start_as_current_span('use_case.list_layout_templates'):
            async with self.uow_factory() as uow:
                return await uow.layout_template_repo.list_all()

    def list_presets(self) -> Tuple[LayoutPreset, ...]:
        """Built-in bus types, smallest first"""
        return LAYOUT_PRESETS
