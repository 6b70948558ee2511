"""
Soft Enable

Soft enable/disable for SQLAlchemy models: a boolean column is flipped
instead of deleting rows, and default queries skip disabled rows unless a
query opts in with with_disabled() or only_disabled().
"""

from .errors import DetachedRecordError, NotEnableableError, SoftEnableError
from .hooks import HookEvent, HookRegistry, HookResult, hooks
from .mixin import EnableMixin
from .scope import (
    Visibility,
    apply_enablement_filter,
    enableable_models,
    install_enablement_filter,
    only_disabled,
    uninstall_enablement_filter,
    with_disabled,
    without_disabled,
    without_enablement_filter,
)
from .query import EnableableQuery
from .session import create_db_engine, create_session_factory, get_db

__all__ = [
    "DetachedRecordError",
    "EnableMixin",
    "EnableableQuery",
    "HookEvent",
    "HookRegistry",
    "HookResult",
    "NotEnableableError",
    "SoftEnableError",
    "Visibility",
    "apply_enablement_filter",
    "create_db_engine",
    "create_session_factory",
    "enableable_models",
    "get_db",
    "hooks",
    "install_enablement_filter",
    "only_disabled",
    "uninstall_enablement_filter",
    "with_disabled",
    "without_disabled",
    "without_enablement_filter",
]
