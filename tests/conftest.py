"""Shared fixtures: a psycopg connection stand-in."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def cursor():
    """Cursor mock usable as a context manager."""
    cur = MagicMock()
    cur.__enter__.return_value = cur
    cur.__exit__.return_value = False
    cur.fetchall.return_value = []
    cur.fetchone.return_value = None
    return cur


@pytest.fixture
def conn(cursor):
    """Connection mock handing out ``cursor``."""
    connection = MagicMock()
    connection.cursor.return_value = cursor
    return connection


def post_row(**overrides):
    """A joined posts/postmeta row as the repository queries return it."""
    row = {
        "id": 7,
        "post_title": "Hello",
        "post_date": "2021-03-05 10:00:00",
        "post_content": "<p>Some <b>content</b></p>",
        "post_name": "hello",
        "meta_value": "2021/03/hello.jpg",
        "post_description": None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_row():
    """Factory for post rows."""
    return post_row
