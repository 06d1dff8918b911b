"""Unit tests for PostRepository."""

import datetime as dt

import psycopg
import pytest

from wpfeed.config import BlogConfig
from wpfeed.db import OrderMode, PostRepository, QueryBuilder
from wpfeed.errors import MappingError, QueryError


@pytest.fixture
def repo(conn):
    return PostRepository(QueryBuilder(conn))


def executed(cursor):
    args, _ = cursor.execute.call_args
    return args[0], args[1]


class TestGetLatest:
    """Tests for get_latest."""

    def test_returns_posts(self, repo, cursor, make_row):
        cursor.fetchall.return_value = [
            make_row(id=3, post_date="2021-03-05 10:00:00"),
            make_row(id=2, post_date="2021-02-01 10:00:00"),
        ]

        posts = repo.get_latest()

        assert [p.id for p in posts] == [3, 2]
        assert [p.date for p in posts] == ["03/05/2021", "02/01/2021"]

    def test_limit_is_bound_not_interpolated(self, repo, cursor):
        repo.get_latest(limit=5)

        sql, params = executed(cursor)
        assert "LIMIT %(limit)s" in sql
        assert params["limit"] == 5
        assert params["content_length"] == 221

    def test_default_limit_is_three(self, repo, cursor):
        repo.get_latest()

        _, params = executed(cursor)
        assert params["limit"] == 3

    def test_query_shape(self, repo, cursor):
        repo.get_latest()

        sql, _ = executed(cursor)
        assert "FROM aa_posts p1" in sql
        assert "'_thumbnail_id'" in sql
        assert "'_wp_attached_file'" in sql
        assert "'_aioseop_description'" in sql
        assert "p1.post_status = 'publish'" in sql
        assert "p1.post_type = 'post'" in sql
        assert "ORDER BY p1.post_date DESC" in sql

    def test_table_prefix_from_config(self, conn, cursor):
        repo = PostRepository(QueryBuilder(conn), BlogConfig(table_prefix="wp_"))

        repo.get_latest()

        sql, _ = executed(cursor)
        assert "FROM wp_posts p1" in sql
        assert "LEFT JOIN wp_postmeta wm1" in sql

    @pytest.mark.parametrize("limit", [0, -1, 101, "3; DROP TABLE aa_posts", 2.5, True])
    def test_invalid_limit(self, repo, conn, limit):
        with pytest.raises(ValueError):
            repo.get_latest(limit=limit)
        conn.cursor.assert_not_called()

    def test_query_error_propagates(self, repo, cursor):
        cursor.execute.side_effect = psycopg.errors.UndefinedTable('relation "aa_posts" does not exist')

        with pytest.raises(QueryError):
            repo.get_latest()


class TestGetRandomPosts:
    """Tests for get_random_posts."""

    def test_random_order(self, repo, cursor):
        repo.get_random_posts()

        sql, params = executed(cursor)
        assert "ORDER BY RANDOM()" in sql
        assert "p1.post_date > %(cutoff)s" in sql
        assert params["cutoff"] == dt.date(2017, 11, 24)
        assert params["limit"] == 3

    def test_date_order(self, repo, cursor):
        repo.get_random_posts(amount=4, order=OrderMode.DATE_DESC)

        sql, params = executed(cursor)
        assert "ORDER BY p1.post_date DESC" in sql
        assert params["limit"] == 4

    def test_order_accepts_string(self, repo, cursor):
        repo.get_random_posts(order="date")

        sql, _ = executed(cursor)
        assert "ORDER BY p1.post_date DESC" in sql

    def test_no_description_join(self, repo, cursor, make_row):
        row = make_row()
        del row["post_description"]
        cursor.fetchall.return_value = [row]

        posts = repo.get_random_posts()

        sql, _ = executed(cursor)
        assert "_aioseop_description" not in sql
        assert posts[0].post_description is None

    def test_custom_cutoff(self, conn, cursor):
        repo = PostRepository(QueryBuilder(conn), BlogConfig(cutoff_date=dt.date(2020, 1, 1)))

        repo.get_random_posts()

        _, params = executed(cursor)
        assert params["cutoff"] == dt.date(2020, 1, 1)

    def test_invalid_amount(self, repo):
        with pytest.raises(ValueError):
            repo.get_random_posts(amount=0)

    def test_invalid_order(self, repo):
        with pytest.raises(ValueError):
            repo.get_random_posts(order="sideways")


class TestMappingErrors:
    """Tests for rows that cannot be mapped."""

    def test_raise_by_default(self, repo, cursor, make_row):
        cursor.fetchall.return_value = [make_row(id=1), make_row(id=2, post_date="garbage date")]

        with pytest.raises(MappingError) as exc_info:
            repo.get_latest()

        assert exc_info.value.row_id == 2

    def test_skip_when_configured(self, conn, cursor, make_row):
        repo = PostRepository(QueryBuilder(conn), BlogConfig(on_mapping_error="skip"))
        cursor.fetchall.return_value = [
            make_row(id=1),
            make_row(id=2, post_date="garbage date"),
            make_row(id=3),
        ]

        posts = repo.get_latest()

        assert [p.id for p in posts] == [1, 3]
