"""
Startup wiring.

Builds the metadata store and a hook registry, constructs each plugin once
and injects it into the registry. The host keeps the returned registry for
the lifetime of the process and fires hooks on it.
"""

import logging

from crowdfunding_fields.config import Settings, settings
from crowdfunding_fields.database import create_db_engine, create_session_factory, init_db
from crowdfunding_fields.plugins.loader import initialize_plugins
from crowdfunding_fields.plugins.registry import HookRegistry
from crowdfunding_fields.storage import MetadataStore, SQLMetadataStore
from crowdfunding_fields.utils.structured_logging import setup_structured_logging

logger = logging.getLogger(__name__)


def create_store(app_settings: Settings = settings) -> SQLMetadataStore:
    """Open the metadata database and make sure its tables exist."""
    engine = create_db_engine(app_settings.database_url, echo=app_settings.debug)
    init_db(engine)
    return SQLMetadataStore(create_session_factory(engine))


def bootstrap(
    app_settings: Settings = settings,
    store: MetadataStore | None = None,
    configure_logging: bool = True,
) -> HookRegistry:
    """Create the hook registry with every enabled plugin registered."""
    if configure_logging:
        setup_structured_logging(
            log_level=app_settings.log_level,
            json_format=app_settings.log_json,
            log_file=app_settings.log_file,
        )

    logger.info(f"Starting {app_settings.app_name} v{app_settings.app_version} ({app_settings.environment})")

    if store is None:
        store = create_store(app_settings)

    registry = HookRegistry()
    initialize_plugins(registry, store)
    return registry
