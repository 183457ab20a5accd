"""
Base Model Class

Declarative base for applications that do not bring their own. Any mapped
class works with the repositories; this one only saves the boilerplate.

Optimistic Locking:
===================
The version check in the repositories reads the attribute configured as the
mapper's version_id_col:

    from surisql.models.base import Base

    class Item(Base):
        __tablename__ = "items"

        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        name: Mapped[str] = mapped_column(String(100))
        version: Mapped[int] = mapped_column(Integer, nullable=False)

        __mapper_args__ = {"version_id_col": version}

SQLAlchemy increments version on every UPDATE and the repositories compare it
against the value the caller last saw.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for surisql-managed models.

    Example:
        class Item(Base):
            __tablename__ = "items"
            id: Mapped[int] = mapped_column(primary_key=True)
    """
