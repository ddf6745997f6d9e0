# users_service/main.py

import logging
import sys
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from sqlalchemy.engine import Engine

from users_service.api import health, users
from users_service.config import DEFAULT_DB_PING_TIMEOUT, load_settings
from users_service.database import create_db_engine, init_db, make_session_factory


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def create_app(engine: Engine, ping_timeout: float = DEFAULT_DB_PING_TIMEOUT) -> FastAPI:
    """
    Wires the routers to the given engine. The schema must already exist.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        engine.dispose()

    app = FastAPI(title="users-service", lifespan=lifespan)

    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.ping_timeout = ping_timeout

    app.include_router(users.router)
    app.include_router(health.router)

    return app


def main() -> int:
    try:
        settings = load_settings()
    except ValueError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.critical("Invalid configuration: %s", e)
        return 1

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        engine = create_db_engine(settings)
        init_db(engine)
    except Exception as e:
        # str() of a SQLAlchemy error never carries the URL password
        logger.critical("Failed to init db at %s: %s", settings.safe_database_target, e)
        return 1

    logger.info("Connected to DB %s:%s", settings.db_host, settings.db_port)

    app = create_app(engine, ping_timeout=settings.db_ping_timeout)
    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
