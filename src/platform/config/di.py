"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.events.driven_adapter.gateway.partner_pricing_gateway_impl import (
    PartnerPricingGatewayImpl,
)
from src.service.events.driven_adapter.repo.event_command_repo_impl import EventCommandRepoImpl
from src.service.events.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine, PostgreSQL or SQLite depending on the URL)
    database = providers.Singleton(
        Database,
        db_url=config_service.provided.DATABASE_URL_ASYNC,
        command_timeout=config_service.provided.DB_COMMAND_TIMEOUT,
        busy_timeout=config_service.provided.SQLITE_BUSY_TIMEOUT,
    )

    # Repositories (stateless - use session_factory per call)
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    event_command_repo = providers.Singleton(
        EventCommandRepoImpl, session_factory=database.provided.session
    )

    # External services
    partner_pricing_gateway = providers.Singleton(
        PartnerPricingGatewayImpl,
        base_urls=config_service.provided.PARTNER_BASE_URLS,
        timeout=config_service.provided.PARTNER_REQUEST_TIMEOUT_SECONDS,
    )


container = Container()
