"""
pacs gateway - Main Application

HTTP surface over the ISO 20022 pacs.008 / pacs.002 mapper:

- Parse pacs.008 and pacs.002 XML into typed JSON records
- Build single-transaction pacs.008 and pacs.002 status reports
- Validate documents against the XSD schemas
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from . import __version__
from .api import health, iso20022
from .config import settings
from .iso20022.registry import supported_messages
from .observability import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle.

    Startup configures logging; there are no connections to open or close.
    """
    configure_logging()
    logger.info(
        "%s %s started, supported messages: %s",
        settings.app_name, __version__, ", ".join(supported_messages()),
    )
    yield
    logger.info("%s stopped", settings.app_name)


app = FastAPI(
    title="pacs gateway",
    description="ISO 20022 pacs.008 / pacs.002 parsing, serialization and builders.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health.router, tags=["Health"])
app.include_router(iso20022.router, prefix="/v1/iso20022")
