"""Thin query builder over a psycopg connection.

Only four statement shapes are supported: a raw query, ``SELECT *`` over a
table, a single-row lookup by equality and a keyed insert. Values are always
bound as named parameters; table and column names must be plain identifiers
supplied by our own code.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

import psycopg
from psycopg import Connection, Cursor
from psycopg.rows import dict_row

from ..errors import ConnectivityError, QueryError, WPFeedError

Row = Dict[str, Any]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str) -> str:
    if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


class QueryBuilder:
    """Build and run parameterized statements against a shared connection.

    The connection is owned by the caller; the builder never opens, closes or
    locks it. Rows always come back as dicts keyed by column name.
    """

    def __init__(self, conn: Connection) -> None:
        """Initialize query builder."""
        self.conn = conn

    def _fail(self, operation: str, sql: str, error: psycopg.Error) -> WPFeedError:
        if isinstance(error, (psycopg.OperationalError, psycopg.InterfaceError)):
            return ConnectivityError(f"{operation} failed: {error}")
        # Leave the connection usable for the next statement
        self.conn.rollback()
        return QueryError(operation, str(error), sql)

    def _execute(
        self,
        operation: str,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Cursor[Row]:
        cur = None
        try:
            cur = self.conn.cursor(row_factory=dict_row)
            cur.execute(sql, params)
        except psycopg.Error as e:
            if cur is not None:
                cur.close()
            raise self._fail(operation, sql, e) from e
        return cur

    def query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Cursor[Row]:
        """Execute a raw statement and return a cursor positioned on its rows.

        Args:
            sql: Statement text, using ``%(name)s`` placeholders if any
            params: Values bound to the placeholders

        Returns:
            Open cursor producing dict rows. The caller closes it.

        Raises:
            QueryError: If the database rejects the statement
            ConnectivityError: If the connection is unusable
        """
        return self._execute("query", sql, params)

    def select_all(self, table: str) -> List[Row]:
        """Return every row of ``table``."""
        sql = f"SELECT * FROM {_check_identifier(table)}"
        with self._execute("select_all", sql) as cur:
            return cur.fetchall()

    def insert(self, table: str, fields: Mapping[str, Any]) -> bool:
        """Insert one row built from ``fields`` and commit it.

        Returns:
            True once the row is committed

        Raises:
            ValueError: If ``fields`` is empty or holds an invalid column name
            QueryError: On constraint violations or unknown columns
            ConnectivityError: If the connection is lost before the commit
        """
        if not fields:
            raise ValueError("insert() needs at least one field")

        columns = [_check_identifier(key) for key in fields]
        sql = "INSERT INTO {} ({}) VALUES ({})".format(
            _check_identifier(table),
            ", ".join(columns),
            ", ".join(f"%({key})s" for key in columns),
        )

        with self._execute("insert", sql, dict(fields)):
            pass
        try:
            self.conn.commit()
        except psycopg.Error as e:
            raise self._fail("insert", sql, e) from e
        return True

    def find(self, table: str, fields: Mapping[str, Any]) -> Optional[Row]:
        """Return the first row of ``table`` matching every key in ``fields``.

        Conditions are joined with ``AND``, so a row must satisfy all of them.

        Returns:
            Matching row, or None if nothing matches
        """
        if not fields:
            raise ValueError("find() needs at least one field")

        conditions = " AND ".join(
            f"{_check_identifier(key)} = %({key})s" for key in fields
        )
        sql = f"SELECT * FROM {_check_identifier(table)} WHERE {conditions} LIMIT 1"

        with self._execute("find", sql, dict(fields)) as cur:
            return cur.fetchone()
