from typing import Any, Mapping, Optional

from opentelemetry import trace

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.bus_amenities import BusAmenities
from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate
from src.service.seating.domain.layout_geometry import LayoutGeometry, as_geometry
from src.service.seating.domain.layout_presets import LayoutType, find_preset


class CreateLayoutTemplateUseCase:
    """
    Create a reusable bus type

    `total_seats` is always stamped from the layout generator, never taken from the caller.
    """

    def __init__(self, *, uow_factory: SeatingUnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def create_template(
        self,
        *,
        name: str,
        geometry: LayoutGeometry | Mapping[str, Any],
        amenities: Optional[BusAmenities] = None,
        layout_type: LayoutType | str = LayoutType.GT_STANDARD,
        length_meters: Optional[float] = None,
        description: Optional[str] = None,
        is_custom: bool = False,
    ) -> LayoutTemplate:
        with self.tracer.start_as_current_span(
            'use_case.create_layout_template', attributes={'template.name': name}
        ):
            template = LayoutTemplate.create(
                name=name,
                geometry=as_geometry(geometry),
                amenities=amenities,
                is_custom=is_custom,
                layout_type=layout_type,
                length_meters=length_meters,
                description=description,
            )
            return await self._store(template)

    @Logger.io
    async def create_template_from_preset(
        self, *, label: str, name: Optional[str] = None
    ) -> LayoutTemplate:
        """
        Copy a built-in bus type into the template store

        Args:
            label: Preset label, matched case-insensitively
            name: Optional template name, defaults to the preset label

        Raises:
            NotFoundError: If no preset has that label
        """
        with self.tracer.start_as_current_span(
            'use_case.create_layout_template_from_preset', attributes={'preset.label': label}
        ):
            preset = find_preset(label)
            if preset is None:
                raise NotFoundError(f'Unknown bus preset: {label}')
            return await self._store(LayoutTemplate.from_preset(preset, name=name))

    async def _store(self, template: LayoutTemplate) -> LayoutTemplate:
        async with self.uow_factory() as uow:
            await uow.layout_template_repo.add(template=template)
            await uow.commit()

        Logger.base.info(
            f'🚌 [TEMPLATE] Created "{template.name}" ({template.total_seats} seats, id={template.id})'
        )
        return template
