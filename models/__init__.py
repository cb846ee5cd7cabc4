from contextlib import nullcontext
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

import pendulum
from sqlalchemy.orm import object_session

from main import db

# If we're type checking, we want models to inherit from the BaseModel (trivial subclass
# of DeclarativeBase) as mypy can't handle using the sqlalchemy-flask generated db.Model
if TYPE_CHECKING:
    from main import BaseModel
else:
    BaseModel = db.Model


def utcnow() -> datetime:
    """The current instant, timezone-aware. Used as the default clock."""
    return datetime.now(UTC)


def local_today(timezone: str, clock=None) -> date:
    """The calendar day it currently is in `timezone`, regardless of where we're running."""
    now = (clock or utcnow)()
    return pendulum.instance(now).in_timezone(timezone).date()


def no_autoflush(obj):
    """Stop lazy loads on `obj`'s relationships from flushing half-edited objects."""
    session = object_session(obj)
    if session is None:
        return nullcontext()
    return session.no_autoflush


from .conference import *  # noqa: F403
from .cfp import *  # noqa: F403

db.configure_mappers()
