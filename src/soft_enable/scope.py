"""
Enablement Filter

Global criteria that hide disabled rows of every EnableMixin model from ORM
statements, plus per-statement overrides to include or isolate them.

Each enableable model is registered once, when SQLAlchemy configures its
mapper. A do_orm_execute listener then adds one with_loader_criteria()
option per registered model to every ORM SELECT, UPDATE and DELETE, so the
predicate also reaches joins, EXISTS subqueries and relationship loads.
Overrides are execution options keyed by model: switching posts to
"disabled" on a users query leaves the users predicate in place, and the
other way round.
"""

import enum
import logging
from typing import Any, Dict, List, Optional, Set, Tuple, Type, TypeVar

from sqlalchemy import event, false, inspect, true
from sqlalchemy.orm import ORMExecuteState, configure_mappers, with_loader_criteria
from sqlalchemy.orm.util import LoaderCriteriaOption

from .config import BYPASS_OPTION, VISIBILITY_OPTION
from .errors import NotEnableableError
from .mixin import EnableMixin

logger = logging.getLogger(__name__)

ExecutableT = TypeVar("ExecutableT")


class Visibility(str, enum.Enum):
    ENABLED = "enabled"
    ALL = "all"
    DISABLED = "disabled"


DEFAULT_VISIBILITY = Visibility.ENABLED

_enableable_models: List[Type[EnableMixin]] = []


# ============================================================================
# Registration
# ============================================================================


@event.listens_for(EnableMixin, "mapper_configured", propagate=True)
def _register_enableable_model(mapper: Any, class_: Type[EnableMixin]) -> None:
    # Criteria on a root mapper already cover its subclasses
    if _enableable_parent(mapper) is not None:
        return
    if class_ not in _enableable_models:
        _enableable_models.append(class_)
        logger.debug("Registered enablement filter for %s", class_.__name__)


def _enableable_parent(mapper: Any) -> Optional[Any]:
    parent = mapper.inherits
    if parent is not None and issubclass(parent.class_, EnableMixin):
        return parent
    return None


def enableable_models() -> List[Type[EnableMixin]]:
    """Root models the filter applies to"""
    configure_mappers()
    return list(_enableable_models)


def root_model(entity: Any) -> Type[EnableMixin]:
    """
    Resolve a class, alias or mapper to the enableable model owning its filter

    Raises:
        NotEnableableError: if the entity is not mapped or lacks EnableMixin
    """
    insp = inspect(entity, raiseerr=False)
    mapper = getattr(insp, "mapper", None)
    if mapper is None or not issubclass(mapper.class_, EnableMixin):
        raise NotEnableableError(f"{entity!r} is not a soft-enableable model")

    parent = _enableable_parent(mapper)
    while parent is not None:
        mapper = parent
        parent = _enableable_parent(mapper)
    return mapper.class_


def primary_entity(executable: Any) -> Any:
    """First ORM entity a query or statement selects from or targets"""
    descriptions = getattr(executable, "column_descriptions", None)
    if descriptions is None:
        descriptions = [getattr(executable, "entity_description", None) or {}]
    for description in descriptions:
        entity = description.get("entity")
        if entity is not None:
            return entity
    raise NotEnableableError(f"{executable!r} has no ORM entity to filter")


# ============================================================================
# Criteria
# ============================================================================


def visibility_criteria(model: Type[EnableMixin], visibility: Visibility) -> Optional[Any]:
    """SQL predicate for a visibility mode, None when no filtering applies"""
    column = model.enabled_attribute()
    if visibility is Visibility.ENABLED:
        return column == true()
    if visibility is Visibility.DISABLED:
        # NULL rows count as disabled for is_disabled() but are not matched here
        return column == false()
    return None


def visibility_overrides(execution_options: Any) -> Dict[Type[EnableMixin], Visibility]:
    return dict(execution_options.get(VISIBILITY_OPTION, ()))


def propagated_models(statement: Any) -> Set[Any]:
    """Models whose criteria a relationship load inherited from its parent query"""
    return {
        option.root_entity
        for option in getattr(statement, "_with_options", ())
        if isinstance(option, LoaderCriteriaOption)
    }


def apply_enablement_filter(execute_state: ORMExecuteState) -> None:
    """do_orm_execute listener adding the enablement criteria to a statement"""
    if not execute_state.is_orm_statement:
        return
    if not (execute_state.is_select or execute_state.is_update or execute_state.is_delete):
        return
    # Refreshes must still find disabled rows
    if execute_state.is_column_load:
        return

    options = execute_state.execution_options
    if options.get(BYPASS_OPTION, False):
        return

    skip = set()
    if execute_state.is_relationship_load:
        # Parents loaded through a filtered query pass their criteria on;
        # parents that never were (new, refreshed) get the default
        skip = propagated_models(execute_state.statement)

    overrides = visibility_overrides(options)
    criteria_options = []
    for model in enableable_models():
        if model in skip:
            continue
        criteria = visibility_criteria(model, overrides.get(model, DEFAULT_VISIBILITY))
        if criteria is None:
            # Still recorded so relationship loads keep the override
            criteria = true()
        criteria_options.append(with_loader_criteria(model, criteria, include_aliases=True))

    if criteria_options:
        execute_state.statement = execute_state.statement.options(*criteria_options)


def install_enablement_filter(target: Any) -> Any:
    """
    Attach the enablement filter to a Session class, sessionmaker or session

    Returns:
        The target, for chaining at bootstrap
    """
    if event.contains(target, "do_orm_execute", apply_enablement_filter):
        logger.warning("Enablement filter already installed on %r", target)
        return target
    event.listen(target, "do_orm_execute", apply_enablement_filter)
    logger.debug("Installed enablement filter on %r", target)
    return target


def uninstall_enablement_filter(target: Any) -> None:
    if event.contains(target, "do_orm_execute", apply_enablement_filter):
        event.remove(target, "do_orm_execute", apply_enablement_filter)


# ============================================================================
# Per-statement overrides
# ============================================================================


def set_visibility(executable: ExecutableT, visibility: Visibility, *entities: Any) -> ExecutableT:
    """
    Return a copy of a query or statement with a visibility mode for some models

    Args:
        executable: Query, Select, Update or Delete
        visibility: Mode to apply
        entities: Models (or aliases) to apply it to; defaults to the
            statement's primary entity

    Returns:
        New query or statement; the original is left untouched
    """
    targets = entities or (primary_entity(executable),)
    overrides = visibility_overrides(executable.get_execution_options())
    for entity in targets:
        overrides[root_model(entity)] = Visibility(visibility)

    value: Tuple[Tuple[Type[EnableMixin], Visibility], ...] = tuple(overrides.items())
    return executable.execution_options(**{VISIBILITY_OPTION: value})


def with_disabled(executable: ExecutableT, *entities: Any) -> ExecutableT:
    """Drop the enabled predicate: enabled and disabled rows are returned"""
    return set_visibility(executable, Visibility.ALL, *entities)


def without_disabled(executable: ExecutableT, *entities: Any) -> ExecutableT:
    """Explicitly restore the default enabled = true predicate"""
    return set_visibility(executable, Visibility.ENABLED, *entities)


def only_disabled(executable: ExecutableT, *entities: Any) -> ExecutableT:
    """Replace the predicate with enabled = false"""
    return set_visibility(executable, Visibility.DISABLED, *entities)


def without_enablement_filter(executable: ExecutableT) -> ExecutableT:
    """Skip the filter for every model in the statement"""
    return executable.execution_options(**{BYPASS_OPTION: True})
