"""SQLAlchemy declarative Base shared by the account schema and Alembic autogenerate."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models; Base.metadata drives migrations and test schemas."""
