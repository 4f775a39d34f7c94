from contextlib import asynccontextmanager
import logging

from careerlens.storage.records import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    init_db()
    logger.info("records_store_ready")
    yield
