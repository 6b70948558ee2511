"""
Soft Enable Mixin

Adds enable()/disable() to SQLAlchemy models. Instead of deleting a row the
mixin flips a boolean column and saves the record; the enablement filter in
soft_enable.scope hides disabled rows from default queries.

Usage:
    class Post(Base, EnableMixin):
        __tablename__ = "posts"

        id = Column(Integer, primary_key=True)
        enabled = Column(Boolean, default=True)

    @Post.on_disabling
    def keep_pinned(post):
        return not post.pinned
"""

import logging
from typing import Any, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session, object_session

from .config import COMMIT_ON_SAVE, DEFAULT_ENABLED_COLUMN
from .errors import DetachedRecordError
from .hooks import HookCallback, HookEvent, HookResult, hooks

logger = logging.getLogger(__name__)


class EnableMixin:
    """
    Soft enable/disable behaviour for a mapped class

    Lifecycle hooks are registered with on_enabling, on_enabled, on_disabling
    and on_disabled, standing for the enabling, enabled, disabling and disabled
    events; the bare names would clash with the flag column.
    """

    # Override per model when the flag is not called "enabled"
    __enabled_column__: str = DEFAULT_ENABLED_COLUMN

    # ------------------------------------------------------------------
    # Column resolution
    # ------------------------------------------------------------------

    @classmethod
    def get_enabled_column(cls) -> str:
        """Name of the mapped attribute holding the enabled flag"""
        return cls.__enabled_column__

    @classmethod
    def get_qualified_enabled_column(cls) -> str:
        """Table-qualified column name, e.g. ``posts.enabled``"""
        column = inspect(cls).columns[cls.get_enabled_column()]
        return f"{column.table.name}.{column.name}"

    @classmethod
    def enabled_attribute(cls) -> Any:
        """Mapped attribute of the flag column, for building criteria"""
        return getattr(cls, cls.get_enabled_column())

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def is_enabled(self) -> bool:
        """True only when the flag is exactly True"""
        return getattr(self, self.get_enabled_column()) is True

    def is_disabled(self) -> bool:
        """True when the flag is False or unset"""
        value = getattr(self, self.get_enabled_column())
        return value is None or value is False

    def enable(self, session: Optional[Session] = None) -> bool:
        """
        Enable the record and save it

        Returns:
            False when an enabling hook aborted, otherwise the save result
        """
        return self._switch(True, HookEvent.ENABLING, HookEvent.ENABLED, session)

    def disable(self, session: Optional[Session] = None) -> bool:
        """
        Disable the record and save it

        Returns:
            False when a disabling hook aborted, otherwise the save result
        """
        return self._switch(False, HookEvent.DISABLING, HookEvent.DISABLED, session)

    def _switch(self, value: bool, before: HookEvent, after: HookEvent, session: Optional[Session]) -> bool:
        if hooks.fire(self, before) is HookResult.ABORT:
            return False

        setattr(self, self.get_enabled_column(), value)
        result = self.save(session)
        logger.info("%s %r", after.value.capitalize(), self)

        hooks.fire(self, after)
        return result

    def save(self, session: Optional[Session] = None) -> bool:
        """Persist the record through its session"""
        session = session or object_session(self)
        if session is None:
            raise DetachedRecordError(f"{self!r} is not attached to a session; pass one to save it")

        session.add(self)
        if COMMIT_ON_SAVE:
            session.commit()
        else:
            session.flush()
        return True

    # ------------------------------------------------------------------
    # Lifecycle hook registration
    # ------------------------------------------------------------------

    @classmethod
    def on_enabling(cls, callback: HookCallback) -> HookCallback:
        return hooks.register(cls, HookEvent.ENABLING, callback)

    @classmethod
    def on_enabled(cls, callback: HookCallback) -> HookCallback:
        return hooks.register(cls, HookEvent.ENABLED, callback)

    @classmethod
    def on_disabling(cls, callback: HookCallback) -> HookCallback:
        return hooks.register(cls, HookEvent.DISABLING, callback)

    @classmethod
    def on_disabled(cls, callback: HookCallback) -> HookCallback:
        return hooks.register(cls, HookEvent.DISABLED, callback)

    @classmethod
    def flush_event_listeners(cls) -> None:
        hooks.flush(cls)
