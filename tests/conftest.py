"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest
import structlog

from helpers import GraphQLServer, write_move_toml


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop any structlog configuration a CLI invocation installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def graphql_server() -> Callable[..., GraphQLServer]:
    """Factory for a fake GraphQL server."""
    return GraphQLServer


@pytest.fixture
def packages_root(tmp_path: Path) -> Path:
    """A tree with App -> AccountExtensions -> Base and Dashboard -> Base."""
    root = tmp_path / "packages"
    write_move_toml(root, "App", local_deps=["AccountExtensions"])
    write_move_toml(root, "AccountExtensions", local_deps=["Base"])
    write_move_toml(root, "Base")
    write_move_toml(root, "Dashboard", local_deps=["Base"])
    return root
