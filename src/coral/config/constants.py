"""Configuration constants.

Values here are protocol or format facts and are NOT user-configurable.
For configurable values, see models.py.
"""

PROTO_EXTENSION = ".proto"
"""File extension appended to synthesized paths of external types."""

PACKAGE_SEPARATOR = "."
"""Separator between package segments and type names in descriptors."""

PATH_SEPARATOR = "/"
"""Separator between directories in descriptor file names."""

STDIN_BUFFER_CAPACITY = 64 * 1024
"""Read chunk size when pulling a descriptor set from stdin."""

DEFAULT_EXTERNAL_PREFIXES: tuple[str, ...] = ("google/", "buf/")
"""Descriptor paths under these prefixes are shared schema, not project code."""

DEFAULT_CORS_ORIGINS: tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)
"""Local development frontends allowed to read the snapshot service."""

PORT_MIN = 0
PORT_MAX = 65535
"""Valid port range."""
