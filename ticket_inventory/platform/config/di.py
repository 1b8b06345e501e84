"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/providers/factory.html
"""

from dependency_injector import containers, providers

from ticket_inventory.platform.config.core_setting import Settings
from ticket_inventory.service.ticketing.app.ticket_manager import TicketManager
from ticket_inventory.service.ticketing.app.ticket_repository import TicketRepository
from ticket_inventory.service.ticketing.driven_adapter.http_ticket_persistence import (
    HttpTicketPersistence,
)
from ticket_inventory.service.ticketing.driven_adapter.loguru_notifier import LoguruNotifier


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Driven adapters (one HTTP connection pool per process)
    notifier = providers.Singleton(LoguruNotifier)
    ticket_persistence = providers.Singleton(
        HttpTicketPersistence,
        base_url=config_service.provided.TICKETING_API_BASE_URL,
        timeout=config_service.provided.HTTP_TIMEOUT_SECONDS,
    )

    # A repository owns the cancel scope of its in-flight call, so each manager gets its own
    ticket_repository = providers.Factory(
        TicketRepository,
        persistence=ticket_persistence,
        timeout=config_service.provided.PERSISTENCE_TIMEOUT_SECONDS,
    )
    ticket_manager = providers.Factory(
        TicketManager,
        repository=ticket_repository,
        notifier=notifier,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()


async def shutdown() -> None:
    await container.ticket_persistence().aclose()
    cleanup()
