from typing import Optional
from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate


class SaveConfigurationAsTemplateUseCase:
    """Promote a trip's bus into a reusable custom template"""

    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def save_as_template(
        self, *, config_id: UUID, name: str, description: Optional[str] = None
    ) -> LayoutTemplate:
        with self.tracer.start_as_current_span(
            'use_case.save_configuration_as_template',
            attributes={'bus_config.id': str(config_id)},
        ):
            async with self.uow_factory() as uow:
                configuration = await uow.bus_configuration_repo.get_by_id(config_id=config_id)
                if not configuration:
                    raise NotFoundError(f'Bus configuration {config_id} not found')

                template = LayoutTemplate.create(
                    name=name,
                    geometry=configuration.geometry,
                    amenities=configuration.amenities,
                    is_custom=True,
                    description=description,
                )
                await uow.layout_template_repo.add(template=template)
                await uow.commit()

            Logger.base.info(
                f'💾 [TEMPLATE] Saved configuration {config_id} as custom template "{template.name}"'
            )
            return template
