from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from psycopg import Connection, connect
from psycopg.rows import dict_row

from bug_tracker.core.config import get_settings


def get_database_url() -> str:
    return get_settings().database_url


@contextmanager
def get_connection(database_url: str | None = None, **options: Any) -> Iterator[Connection]:
    """Open one connection for a unit of work, committed when the block exits.

    Rows come back as dicts keyed by column name. Extra keyword arguments go
    to ``psycopg.connect`` (``connect_timeout``, ``autocommit``, ...).
    """
    url = database_url or get_database_url()
    options.setdefault("row_factory", dict_row)
    with connect(url, **options) as connection:
        yield connection
