"""Declarative base and type-map for the ormdemo models.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map`` so
``Mapped[...]`` annotations resolve to the column types the ``users``
migration creates.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import DeclarativeBase


class DemoBase(DeclarativeBase):
    """Shared declarative base.

    * ``str`` → ``String``      (``VARCHAR`` without a length)
    * ``int`` → ``BigInteger``  (``INT8``)
    """

    type_annotation_map = {
        str: String,
        int: BigInteger,
    }
