"""Coral snapshot service - read-only HTTP access to a built graph."""

from coral.server.app import create_app
from coral.server.lifecycle import create_server, run_server

__all__ = [
    "create_app",
    "create_server",
    "run_server",
]
