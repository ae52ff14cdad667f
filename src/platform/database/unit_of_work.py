"""
Unit of Work Pattern - one transaction boundary around the seating repositories

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback; leaving the context without commit rolls back
- Repositories share the UoW's session
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.seating.app.interface.i_bus_configuration_repo import IBusConfigurationRepo
    from src.service.seating.app.interface.i_layout_template_repo import ILayoutTemplateRepo
    from src.service.seating.app.interface.i_seat_assignment_repo import ISeatAssignmentRepo
    from src.service.seating.app.interface.i_seat_claim_token_repo import ISeatClaimTokenRepo


class AbstractSeatingUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Seating Service

    Usage:
        async with uow_factory() as uow:
            await uow.seat_assignment_repo.add(assignment=...)
            await uow.commit()
    """

    layout_template_repo: ILayoutTemplateRepo
    bus_configuration_repo: IBusConfigurationRepo
    seat_assignment_repo: ISeatAssignmentRepo
    seat_claim_token_repo: ISeatClaimTokenRepo

    async def __aenter__(self) -> AbstractSeatingUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemySeatingUnitOfWork(AbstractSeatingUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Opens its own session on enter and closes it on exit, so one instance
    serves exactly one request.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self):
        from src.service.seating.driven_adapter.repo.bus_configuration_repo_impl import (
            BusConfigurationRepoImpl,
        )
        from src.service.seating.driven_adapter.repo.layout_template_repo_impl import (
            LayoutTemplateRepoImpl,
        )
        from src.service.seating.driven_adapter.repo.seat_assignment_repo_impl import (
            SeatAssignmentRepoImpl,
        )
        from src.service.seating.driven_adapter.repo.seat_claim_token_repo_impl import (
            SeatClaimTokenRepoImpl,
        )

        self.session = self.session_maker()

        # Create repositories with shared session
        self.layout_template_repo = LayoutTemplateRepoImpl(session=self.session)
        self.bus_configuration_repo = BusConfigurationRepoImpl(session=self.session)
        self.seat_assignment_repo = SeatAssignmentRepoImpl(session=self.session)
        self.seat_claim_token_repo = SeatClaimTokenRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self):
        await self.session.commit()  # type: ignore[union-attr]

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()


# Use cases open one unit of work per call; concurrent calls never share one
SeatingUnitOfWorkFactory = Callable[[], AbstractSeatingUnitOfWork]
