from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.seating.domain.entity.layout_template_entity import LayoutTemplate


class ILayoutTemplateRepo(ABC):
    """Repository interface for reusable bus types"""

    @abstractmethod
    async def add(self, *, template: LayoutTemplate) -> LayoutTemplate:
        pass

    @abstractmethod
    async def get_by_id(self, *, template_id: UUID) -> Optional[LayoutTemplate]:
        pass

    @abstractmethod
    async def list_all(self) -> List[LayoutTemplate]:
        """All templates ordered by name"""
        pass

    @abstractmethod
    async def delete(self, *, template_id: UUID) -> bool:
        """
        Remove a template. Configurations created from it keep their own geometry copy.

        Returns:
            True if a template was removed, False if it did not exist
        """
        pass
