"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/providers/selector.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemySeatingUnitOfWork
from src.service.seating.app.command.assign_seat_use_case import AssignSeatUseCase
from src.service.seating.app.command.claim_seat_use_case import ClaimSeatUseCase
from src.service.seating.app.command.create_bus_configuration_use_case import (
    CreateBusConfigurationUseCase,
)
from src.service.seating.app.command.create_layout_template_use_case import (
    CreateLayoutTemplateUseCase,
)
from src.service.seating.app.command.delete_bus_configuration_use_case import (
    DeleteBusConfigurationUseCase,
)
from src.service.seating.app.command.delete_layout_template_use_case import (
    DeleteLayoutTemplateUseCase,
)
from src.service.seating.app.command.save_configuration_as_template_use_case import (
    SaveConfigurationAsTemplateUseCase,
)
from src.service.seating.app.command.unassign_seat_use_case import UnassignSeatUseCase
from src.service.seating.app.interface.i_participant_directory import IParticipantDirectory
from src.service.seating.app.query.describe_bus_configuration_use_case import (
    DescribeBusConfigurationUseCase,
)
from src.service.seating.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.seating.app.query.list_layout_templates_use_case import (
    ListLayoutTemplatesUseCase,
)
from src.service.seating.app.query.list_seat_assignments_use_case import (
    ListSeatAssignmentsUseCase,
)
from src.service.seating.app.query.open_claim_link_use_case import OpenClaimLinkUseCase
from src.service.seating.driven_adapter.memory.in_memory_seating_store import (
    InMemorySeatingStore,
    InMemorySeatingUnitOfWork,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from core_setting)
    database = providers.Singleton(Database)

    # Single-process store for SEATING_STORE_BACKEND=memory
    memory_store = providers.Singleton(InMemorySeatingStore)

    # Unit of Work: a fresh instance per call, backend picked from settings
    seating_uow = providers.Selector(
        providers.Callable(lambda s: s.SEATING_STORE_BACKEND.value, config_service),
        postgres=providers.Factory(
            SqlAlchemySeatingUnitOfWork,
            session_maker=database.provided.session_maker.call(),
        ),
        memory=providers.Factory(InMemorySeatingUnitOfWork, store=memory_store),
    )

    # Passenger directory is owned by the host application
    participant_directory = providers.Dependency(instance_of=IParticipantDirectory)

    # Layout Template Store
    list_layout_templates_use_case = providers.Singleton(
        ListLayoutTemplatesUseCase, uow_factory=seating_uow.provider
    )
    create_layout_template_use_case = providers.Singleton(
        CreateLayoutTemplateUseCase, uow_factory=seating_uow.provider
    )
    delete_layout_template_use_case = providers.Singleton(
        DeleteLayoutTemplateUseCase, uow_factory=seating_uow.provider
    )

    # Bus Configuration
    create_bus_configuration_use_case = providers.Singleton(
        CreateBusConfigurationUseCase, uow_factory=seating_uow.provider
    )
    delete_bus_configuration_use_case = providers.Singleton(
        DeleteBusConfigurationUseCase, uow_factory=seating_uow.provider
    )
    describe_bus_configuration_use_case = providers.Singleton(
        DescribeBusConfigurationUseCase, uow_factory=seating_uow.provider
    )
    save_configuration_as_template_use_case = providers.Singleton(
        SaveConfigurationAsTemplateUseCase, uow_factory=seating_uow.provider
    )

    # Seat Assignment Ledger
    assign_seat_use_case = providers.Singleton(AssignSeatUseCase, uow_factory=seating_uow.provider)
    unassign_seat_use_case = providers.Singleton(
        UnassignSeatUseCase, uow_factory=seating_uow.provider
    )
    list_seat_assignments_use_case = providers.Singleton(
        ListSeatAssignmentsUseCase,
        uow_factory=seating_uow.provider,
        participant_directory=participant_directory,
    )
    get_seat_map_use_case = providers.Singleton(
        GetSeatMapUseCase,
        uow_factory=seating_uow.provider,
        participant_directory=participant_directory,
    )

    # Self-Service Claim Flow
    claim_seat_use_case = providers.Singleton(ClaimSeatUseCase, uow_factory=seating_uow.provider)
    open_claim_link_use_case = providers.Singleton(
        OpenClaimLinkUseCase,
        uow_factory=seating_uow.provider,
        participant_directory=participant_directory,
    )


container = Container()


def setup() -> None:
    container.config_service()


async def cleanup() -> None:
    await container.database().dispose()
    container.reset_singletons()
