"""Blog post queries against the WordPress posts/postmeta tables."""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from rich.console import Console
from rich.markup import escape

from ..config import BlogConfig
from ..errors import MappingError
from ..models import BlogPost
from .query_builder import QueryBuilder

console = Console(stderr=True)

MAX_LIMIT = 100


class OrderMode(str, Enum):
    """Ordering for random posts."""

    RANDOM = "random"
    DATE_DESC = "date"


_ORDER_BY = {
    OrderMode.RANDOM: "RANDOM()",
    OrderMode.DATE_DESC: "p1.post_date DESC",
}


def _check_limit(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not 1 <= value <= MAX_LIMIT:
        raise ValueError(f"{name} must be between 1 and {MAX_LIMIT}, got {value}")
    return value


class PostRepository:
    """Read published posts as BlogPost records."""

    def __init__(self, builder: QueryBuilder, blog: Optional[BlogConfig] = None) -> None:
        """Initialize post repository."""
        self.builder = builder
        self.blog = blog or BlogConfig()

    @property
    def posts_table(self) -> str:
        """Name of the posts table, with the configured prefix."""
        return f"{self.blog.table_prefix}posts"

    @property
    def postmeta_table(self) -> str:
        """Name of the post metadata table, with the configured prefix."""
        return f"{self.blog.table_prefix}postmeta"

    def _thumbnail_joins(self) -> str:
        # post -> _thumbnail_id meta -> _wp_attached_file meta of the attachment
        return f"""
            LEFT JOIN {self.postmeta_table} wm1
            ON (
                wm1.post_id = p1.id
                AND wm1.meta_value IS NOT NULL
                AND wm1.meta_key = '_thumbnail_id'
            )
            LEFT JOIN {self.postmeta_table} wm2
            ON (
                wm1.meta_value = wm2.post_id::text
                AND wm2.meta_key = '_wp_attached_file'
                AND wm2.meta_value IS NOT NULL
            )
        """

    def latest_sql(self) -> str:
        """SQL for the newest published posts with thumbnail and description."""
        return f"""
            SELECT p1.id, p1.post_title, p1.post_date,
                LEFT(p1.post_content, %(content_length)s) AS post_content, p1.post_name,
                wm2.meta_value, wm3.meta_value AS post_description
            FROM {self.posts_table} p1
            {self._thumbnail_joins()}
            LEFT JOIN {self.postmeta_table} wm3
            ON (
                wm1.post_id = wm3.post_id
                AND wm3.meta_value IS NOT NULL
                AND wm3.meta_key = '_aioseop_description'
            )
            WHERE
                p1.post_status = 'publish'
                AND p1.post_type = 'post'
            ORDER BY p1.post_date DESC
            LIMIT %(limit)s
        """

    def random_sql(self, order: OrderMode) -> str:
        """SQL for published posts newer than the cutoff date."""
        return f"""
            SELECT p1.id, p1.post_title, p1.post_date,
                LEFT(p1.post_content, %(content_length)s) AS post_content, p1.post_name,
                wm2.meta_value
            FROM {self.posts_table} p1
            {self._thumbnail_joins()}
            WHERE
                p1.post_status = 'publish'
                AND p1.post_type = 'post'
                AND p1.post_date > %(cutoff)s
            ORDER BY {_ORDER_BY[order]}
            LIMIT %(limit)s
        """

    def get_latest(self, limit: Optional[int] = None) -> List[BlogPost]:
        """Get the latest published posts, newest first.

        Args:
            limit: Maximum number of posts (default from config, 3)

        Returns:
            List of BlogPost objects
        """
        if limit is None:
            limit = self.blog.default_limit
        params = {
            "limit": _check_limit("limit", limit),
            "content_length": self.blog.content_fetch_length,
        }
        return self._fetch_posts(self.latest_sql(), params)

    def get_random_posts(
        self,
        amount: Optional[int] = None,
        order: OrderMode = OrderMode.RANDOM,
    ) -> List[BlogPost]:
        """Get published posts dated after the configured cutoff.

        Args:
            amount: Maximum number of posts (default from config, 3)
            order: Random order or newest first

        Returns:
            List of BlogPost objects
        """
        if amount is None:
            amount = self.blog.default_limit
        order = OrderMode(order)
        params = {
            "limit": _check_limit("amount", amount),
            "content_length": self.blog.content_fetch_length,
            "cutoff": self.blog.cutoff_date,
        }
        return self._fetch_posts(self.random_sql(order), params)

    def _fetch_posts(self, sql: str, params: Dict[str, Any]) -> List[BlogPost]:
        with self.builder.query(sql, params) as cur:
            rows = cur.fetchall()
        return self.map_rows(rows)

    def map_rows(self, rows: Iterable[Dict[str, Any]]) -> List[BlogPost]:
        """Turn rows into BlogPost objects.

        With ``on_mapping_error = "skip"`` bad rows are reported and dropped,
        otherwise the first MappingError is raised.
        """
        posts = []
        for row in rows:
            try:
                posts.append(BlogPost.from_row(row))
            except MappingError as e:
                if self.blog.on_mapping_error != "skip":
                    raise
                console.print(f"[yellow]⚠️  Skipping post: {escape(str(e))}[/yellow]")
        return posts
