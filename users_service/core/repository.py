# users_service/core/repository.py

from sqlalchemy import select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from users_service.models.user import User


class RepositoryError(Exception):
    """
    Any failure while talking to the database.
    The original SQLAlchemy error is kept as __cause__.
    """

    @property
    def detail(self) -> str:
        cause = self.__cause__
        # Prefer the driver's message over SQLAlchemy's wrapper text
        orig = getattr(cause, "orig", None)
        return str(orig if orig is not None else cause or self).strip()


def list_users(db: Session) -> list[User]:
    """
    Returns every user in the database's default order.
    """
    try:
        return list(db.scalars(select(User)).all())
    except SQLAlchemyError as e:
        raise RepositoryError("Failed to list users") from e


def create_user(db: Session, name: str) -> User:
    """
    Inserts one user and returns it with its assigned id.
    The caller checks that name is non-empty.
    """
    user = User(name=name)
    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise RepositoryError("Failed to insert user") from e
    return user


def ping(engine: Engine) -> None:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise RepositoryError("Database ping failed") from e
