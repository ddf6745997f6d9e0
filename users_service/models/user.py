# users_service/models/user.py

from sqlalchemy import Column, Integer, Text
from . import Base


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for users.
    Rows are only ever inserted and read, never updated or deleted.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}
