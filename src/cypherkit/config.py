"""Configuration management for the Neo4j connection and result parsing.

Loads configuration from environment variables and an optional .env file
in the project root.

Example .env:

    NEO4J_URI=bolt://localhost:7687
    NEO4J_USERNAME=neo4j
    NEO4J_PASSWORD=your_password_here
    NEO4J_DATABASE=neo4j
    CYPHERKIT_DATE_TYPE=pandas
    LOG_LEVEL=INFO
"""

from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USERNAME = "neo4j"
DEFAULT_PASSWORD = "admin"


class Config(BaseSettings):
    """Client configuration loaded from environment / .env file.

    Every field has an explicit env alias; the field names can also be
    passed directly, e.g. ``Config(url="bolt://localhost:7687")``.
    """

    # Neo4j connection identity
    url: str = Field(
        "",
        alias="NEO4J_URI",
        description="Neo4j connection URI, e.g. bolt://localhost:7687",
    )
    username: str = Field(
        DEFAULT_USERNAME,
        alias="NEO4J_USERNAME",
        description="Neo4j username",
    )
    password: str = Field(
        DEFAULT_PASSWORD,
        alias="NEO4J_PASSWORD",
        description="Neo4j password",
    )
    database: Optional[str] = Field(
        None,
        alias="NEO4J_DATABASE",
        description="Database name; the server default is used when unset",
    )
    max_connection_lifetime: int = Field(
        3600,
        alias="NEO4J_MAX_CONNECTION_LIFETIME",
        description="Maximum lifetime of a Neo4j connection in seconds",
    )
    max_connection_pool_size: int = Field(
        100,
        alias="NEO4J_MAX_CONNECTION_POOL_SIZE",
        description="Maximum number of connections in the Neo4j pool",
    )

    # Query behaviour
    raw: bool = Field(
        False,
        alias="CYPHERKIT_RAW",
        description="Skip result parsing and return the driver's raw results",
    )
    auto_close_driver: bool = Field(
        False,
        alias="CYPHERKIT_AUTO_CLOSE_DRIVER",
        description="Create a driver per call and close it afterwards",
    )
    date_type: str = Field(
        "pandas",
        alias="CYPHERKIT_DATE_TYPE",
        description="Default temporal output: pandas, native, timestamp or raw",
    )

    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Log level for the CLI (e.g. DEBUG, INFO, WARN, ERROR)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,  # we use explicit aliases, so keep env lookup strict
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("url", mode="before")
    @classmethod
    def _url_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) and value else ""

    @field_validator("username", mode="before")
    @classmethod
    def _username_or_default(cls, value: Any) -> str:
        return value if isinstance(value, str) else DEFAULT_USERNAME

    @field_validator("password", mode="before")
    @classmethod
    def _password_or_default(cls, value: Any) -> str:
        return value if isinstance(value, str) else DEFAULT_PASSWORD
