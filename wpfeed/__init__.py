"""wpfeed - display-ready blog posts from a WordPress schema."""

__version__ = "0.1.0"
