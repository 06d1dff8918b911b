"""Data models for wpfeed."""

from .post import BlogPost, content_to_teaser, format_post_date

__all__ = ["BlogPost", "content_to_teaser", "format_post_date"]
