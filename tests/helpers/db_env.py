import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse
from uuid import uuid4

from alembic import command
from alembic.config import Config
from bug_tracker.core.config import get_settings
from bug_tracker.core.database import get_connection
from psycopg import sql

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def with_search_path(database_url: str, schema_name: str) -> str:
    """Pin ``search_path`` to ``schema_name`` first; ``public`` stays reachable for
    ``gen_random_uuid()`` on servers where pgcrypto lives there."""
    parsed = urlparse(database_url)
    query = dict(parse_qsl(parsed.query, keep_blank_values=True))
    option = f"-csearch_path={schema_name},public"
    query["options"] = " ".join(filter(None, (query.get("options"), option)))
    return urlunparse(parsed._replace(query=urlencode(query, doseq=True)))


def _execute(database_url: str, statement: sql.Composable) -> None:
    with get_connection(database_url, autocommit=True) as connection:
        connection.execute(statement)


def truncate_bugs(database_url: str) -> None:
    _execute(database_url, sql.SQL("TRUNCATE TABLE {}").format(sql.Identifier("bugs")))


@contextmanager
def isolated_database(base_url: str, *, schema_prefix: str) -> Iterator[str]:
    """Create a throwaway schema, migrate it to head and point ``DATABASE_URL`` at it."""
    schema_name = f"{schema_prefix}_{uuid4().hex[:8]}"
    scoped_url = with_search_path(base_url, schema_name)
    previous_database_url = os.getenv("DATABASE_URL")

    _execute(base_url, sql.SQL("CREATE SCHEMA {}").format(sql.Identifier(schema_name)))
    os.environ["DATABASE_URL"] = scoped_url
    get_settings.cache_clear()

    try:
        command.upgrade(Config(str(ALEMBIC_INI)), "head")
        yield scoped_url
    finally:
        _execute(base_url, sql.SQL("DROP SCHEMA {} CASCADE").format(sql.Identifier(schema_name)))
        if previous_database_url is None:
            os.environ.pop("DATABASE_URL", None)
        else:
            os.environ["DATABASE_URL"] = previous_database_url
        get_settings.cache_clear()
