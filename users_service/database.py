# users_service/database.py

import logging
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from users_service.config import Settings
from users_service.models import Base


logger = logging.getLogger(__name__)


def create_db_engine(settings: Settings) -> Engine:
    """
    Builds the pooled engine shared by every request.
    Connections are opened lazily, so this does not touch the database.
    """
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        connect_args={"connect_timeout": settings.db_connect_timeout},
    )


def init_db(engine: Engine):
    """
    Creates the users table if it does not exist yet. Safe to run on every start.
    """
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Schema ready (%s)", ", ".join(Base.metadata.tables))


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_db_engine(request: Request) -> Engine:
    return request.app.state.engine
