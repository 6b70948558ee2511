"""
Lifecycle Hooks

Ordered callbacks fired around enable() and disable(). Pre-hooks
(enabling, disabling) may veto the operation by returning False or
HookResult.ABORT; post-hooks (enabled, disabled) run after the record
is saved and their return value is ignored.
"""

import enum
import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List, Optional, Tuple, Type

logger = logging.getLogger(__name__)

HookCallback = Callable[[Any], Any]


class HookEvent(str, enum.Enum):
    ENABLING = "enabling"
    ENABLED = "enabled"
    DISABLING = "disabling"
    DISABLED = "disabled"

    @property
    def is_pre(self) -> bool:
        return self in (HookEvent.ENABLING, HookEvent.DISABLING)


class HookResult(enum.Enum):
    PROCEED = "proceed"
    ABORT = "abort"

    @classmethod
    def from_return(cls, value: Any) -> "HookResult":
        """Only an explicit False (or ABORT) stops a pre-hook chain"""
        if value is False or value is cls.ABORT:
            return cls.ABORT
        return cls.PROCEED


class HookRegistry:
    """Per-model callback lists keyed by lifecycle event"""

    def __init__(self) -> None:
        self._callbacks: DefaultDict[Tuple[type, HookEvent], List[HookCallback]] = defaultdict(list)

    def register(self, model: type, event: str, callback: HookCallback) -> HookCallback:
        """
        Attach a callback to a lifecycle event of a model

        Args:
            model: Mapped class the callback belongs to
            event: One of enabling, enabled, disabling, disabled
            callback: Callable invoked with the record

        Returns:
            The callback, so registration can be used as a decorator
        """
        if not callable(callback):
            raise TypeError(f"Hook callback for {event!r} must be callable, got {callback!r}")
        hook_event = HookEvent(event)
        self._callbacks[(model, hook_event)].append(callback)
        logger.debug("Registered %s hook %r on %s", hook_event.value, callback, model.__name__)
        return callback

    def callbacks_for(self, model: type, event: str) -> List[HookCallback]:
        """Callbacks for a model and its bases, base classes first"""
        hook_event = HookEvent(event)
        callbacks: List[HookCallback] = []
        for klass in reversed(model.__mro__):
            callbacks.extend(self._callbacks.get((klass, hook_event), ()))
        return callbacks

    def fire(self, record: Any, event: str) -> HookResult:
        """
        Run the callbacks of an event for a record

        Pre-hooks stop at the first callback asking to abort. Post-hooks
        always run to completion.
        """
        hook_event = HookEvent(event)
        for callback in self.callbacks_for(type(record), hook_event):
            result = HookResult.from_return(callback(record))
            if hook_event.is_pre and result is HookResult.ABORT:
                logger.info("%s of %r aborted by hook %r", hook_event.value, record, callback)
                return HookResult.ABORT
        return HookResult.PROCEED

    def flush(self, model: Optional[Type] = None) -> None:
        """Forget the callbacks of one model, or of every model"""
        if model is None:
            self._callbacks.clear()
            return
        for key in [key for key in self._callbacks if key[0] is model]:
            del self._callbacks[key]


hooks = HookRegistry()
