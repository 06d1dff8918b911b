"""Configuration models."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("wordpress", description="Database name")
    user: str = Field("wordpress", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")
    charset: str = Field("utf8", description="Client encoding")


class BlogConfig(BaseModel):
    """Settings for reading posts out of the WordPress tables."""

    table_prefix: str = Field("aa_", description="WordPress table prefix")
    cutoff_date: date = Field(date(2017, 11, 24), description="Oldest post date for random posts")
    content_fetch_length: int = Field(221, description="Characters of content fetched per post", ge=1)
    default_limit: int = Field(3, description="Default number of posts", ge=1, le=100)
    on_mapping_error: Literal["raise", "skip"] = Field(
        "raise", description="What to do with rows that cannot be mapped"
    )

    @field_validator("table_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Only allow identifier characters in the prefix."""
        if not all(c.isalnum() or c == "_" for c in v):
            raise ValueError(f"Invalid table prefix: {v!r}")
        return v


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    blog: BlogConfig = Field(default_factory=BlogConfig)
