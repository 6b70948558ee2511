"""
Enableable Query

Query class exposing the enablement overrides and bulk enable/disable.
Install it as the session's query_cls (see soft_enable.session) and as the
query_class of dynamic relationships so relationship-derived queries share
the same interface:

    addresses = relationship("Address", lazy="dynamic", query_class=EnableableQuery)

    user.addresses.filter(Address.city == "Muscat").disable()
    session.query(Post).with_parent(user, User.posts).with_disabled().all()
"""

import logging
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Query

from . import scope

logger = logging.getLogger(__name__)


class EnableableQuery(Query):
    """Query with soft enable extensions"""

    def with_disabled(self, *entities: Any) -> "EnableableQuery":
        return scope.with_disabled(self, *entities)

    def without_disabled(self, *entities: Any) -> "EnableableQuery":
        return scope.without_disabled(self, *entities)

    def only_disabled(self, *entities: Any) -> "EnableableQuery":
        return scope.only_disabled(self, *entities)

    def without_enablement_filter(self) -> "EnableableQuery":
        return scope.without_enablement_filter(self)

    def enable(self, synchronize_session: Any = "auto") -> int:
        """
        Enable every row matched by the query, disabled ones included

        Returns:
            Number of rows updated
        """
        return self._set_enabled(True, synchronize_session)

    def disable(self, synchronize_session: Any = "auto") -> int:
        """
        Disable every row matched by the query

        Returns:
            Number of rows updated
        """
        return self._set_enabled(False, synchronize_session)

    def _set_enabled(self, value: bool, synchronize_session: Any) -> int:
        entity = scope.primary_entity(self)
        scope.root_model(entity)  # raises for models without EnableMixin
        model = inspect(entity).mapper.class_

        count = self.with_disabled().update(
            {model.enabled_attribute(): value},
            synchronize_session=synchronize_session,
        )
        logger.info("%s %d %s row(s)", "Enabled" if value else "Disabled", count, model.__name__)
        return count
