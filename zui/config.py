"""
Configuration management for zui.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ZUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # GraphQL
    graphql_url: str = Field(default="https://sui-mainnet.mystenlabs.com/graphql")
    graphql_timeout: float = Field(default=30.0)

    # Toolchain
    sui_binary: str = Field(default="sui")

    # Publishing
    rpc_url: Optional[str] = Field(
        default=None,
        description="JSON-RPC endpoint for publishing. Unset = the active sui environment.",
    )
    rpc_timeout: float = Field(default=60.0)
    gas_budget: int = Field(default=1_000_000_000, gt=0)
    submitter: str = Field(default="rpc")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
