"""Blog post model built from a WordPress post row."""

import datetime as dt
import re
from typing import Any, Mapping, Optional, Union

import pendulum
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import MappingError

TEASER_LENGTH = 180
TEASER_SUFFIX = "&nbsp;[…]"

# An unterminated tag at the end is possible since content is cut short in SQL
_TAG_RE = re.compile(r"<[^>]*(?:>|$)")


def content_to_teaser(content: Optional[str], description: Optional[str] = None) -> str:
    """Build the preview text for a post.

    A non-empty ``description`` wins verbatim. Otherwise tags are stripped from
    ``content``, whitespace is trimmed, the text is cut to 180 characters and
    the ellipsis marker is appended.
    """
    if description:
        return description

    text = _TAG_RE.sub("", content or "").strip()
    if len(text) > TEASER_LENGTH:
        text = text[:TEASER_LENGTH]
    return text + TEASER_SUFFIX


def format_post_date(value: Union[dt.date, str, None]) -> str:
    """Format a post date as MM/DD/YYYY.

    Missing values give an empty string.

    Raises:
        ValueError: If ``value`` is a string that is not an ISO 8601 calendar
            date. Partial values such as a bare time are rejected rather than
            completed from today's date.
    """
    if value is None or value == "":
        return ""

    if isinstance(value, str):
        try:
            parsed = pendulum.parse(value, exact=True)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Unparseable post date {value!r}") from e
        if not isinstance(parsed, dt.date):
            raise ValueError(f"Post date {value!r} is not a calendar date")
        value = parsed

    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


class BlogPost(BaseModel):
    """Display-ready blog post."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Post ID")

    # Display fields
    title: str = Field(..., description="Post title")
    date: str = Field(..., description="Post date as MM/DD/YYYY")
    teaser: str = Field(..., description="Preview text")
    img_src: Optional[str] = Field(None, description="Relative path to the thumbnail")
    url: str = Field(..., description="Post slug")

    # Source columns, as named in the WordPress tables
    post_title: str = Field("", description="Raw title")
    post_date: Optional[Union[dt.datetime, dt.date, str]] = Field(None, description="Raw post date")
    post_content: Optional[str] = Field(None, description="Raw (truncated) content")
    post_name: str = Field("", description="Post slug")
    meta_value: Optional[str] = Field(None, description="Attached thumbnail file")
    post_description: Optional[str] = Field(None, description="SEO description")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BlogPost":
        """Build a post from a joined posts/postmeta row.

        Raises:
            MappingError: If the row has no id or an unparseable date
        """
        row_id = row.get("id")
        if row_id is None:
            raise MappingError(None, "row has no id")

        post_title = row.get("post_title") or ""
        post_name = row.get("post_name") or ""

        try:
            date = format_post_date(row.get("post_date"))
        except ValueError as e:
            raise MappingError(row_id, str(e)) from e

        try:
            return cls(
                id=row_id,
                title=post_title,
                date=date,
                teaser=content_to_teaser(row.get("post_content"), row.get("post_description")),
                img_src=row.get("meta_value"),
                url=post_name,
                post_title=post_title,
                post_date=row.get("post_date"),
                post_content=row.get("post_content"),
                post_name=post_name,
                meta_value=row.get("meta_value"),
                post_description=row.get("post_description"),
            )
        except ValidationError as e:
            raise MappingError(row_id, str(e)) from e
