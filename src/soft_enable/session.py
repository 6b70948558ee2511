"""
Session Bootstrap

Engine and session factory wired with the enablement filter and the
enableable query class.
"""

import logging
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .config import DATABASE_URL
from .query import EnableableQuery
from .scope import install_enablement_filter

logger = logging.getLogger(__name__)


def create_db_engine(database_url: Optional[str] = None, **kwargs) -> Engine:
    """Create an engine for DATABASE_URL, or the given URL"""
    url = database_url or DATABASE_URL
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, **kwargs)


def create_session_factory(bind=None, **kwargs) -> sessionmaker:
    """
    Build a sessionmaker whose sessions filter out disabled rows

    Args:
        bind: Engine or Connection; a default engine is created when omitted
        kwargs: Extra sessionmaker arguments

    Returns:
        Configured sessionmaker
    """
    if bind is None:
        bind = create_db_engine()
    kwargs.setdefault("autoflush", False)
    kwargs.setdefault("query_cls", EnableableQuery)

    factory = sessionmaker(bind=bind, **kwargs)
    install_enablement_filter(factory)
    logger.info("Session factory ready with enablement filter")
    return factory


def get_db(factory: sessionmaker) -> Iterator[Session]:
    """Yield a session and close it afterwards"""
    db = factory()
    try:
        yield db
    finally:
        db.close()
