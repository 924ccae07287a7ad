import uuid
from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")


def generate_uuid() -> str:
    return uuid.uuid4().hex


class BaseModel(SQLModel):
    """Base class for all domain entities"""
    pass
