from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class DeleteLayoutTemplateUseCase:
    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def delete_template(self, *, template_id: UUID) -> None:
        """
        Delete a template. Configurations created from it keep their copied geometry.

        Raises:
            NotFoundError: If the template does not exist
        """
        with self.tracer.start_as_current_span(
            'use_case.delete_layout_template', attributes={'template.id': str(template_id)}
        ):
            async with self.uow_factory() as uow:
                if not await uow.layout_template_repo.delete(template_id=template_id):
                    raise NotFoundError(f'Bus type {template_id} not found')
                await uow.commit()

            Logger.base.info(f'🗑️ [TEMPLATE] Deleted template {template_id}')
