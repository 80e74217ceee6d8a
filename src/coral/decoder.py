"""Decode serialized FileDescriptorSet bytes and read them from files or stdin."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from coral.config.constants import STDIN_BUFFER_CAPACITY
from coral.core.errors import InputError
from coral.core.logging import get_logger

log = get_logger("decoder")


def decode(data: bytes) -> descriptor_pb2.FileDescriptorSet:
    """Decode a FileDescriptorSet, as produced by ``buf build -o -``.

    Raises:
        InputError: On empty input, malformed bytes, or a set with zero files.
    """
    if not data:
        raise InputError.empty_input()

    fds = descriptor_pb2.FileDescriptorSet()
    try:
        fds.ParseFromString(data)
    except DecodeError as e:
        raise InputError.invalid_protobuf(str(e) or "truncated or malformed message") from e

    if not fds.file:
        raise InputError.no_proto_files()

    log.debug("descriptor_set_decoded", files=len(fds.file), size_bytes=len(data))
    return fds


def read_stream(stream: BinaryIO) -> bytes:
    chunks: list[bytes] = []
    while chunk := stream.read(STDIN_BUFFER_CAPACITY):
        chunks.append(chunk)
    return b"".join(chunks)


def read_input(path: Path | None = None) -> bytes:
    """Read raw descriptor bytes from ``path``, or from stdin when omitted.

    Raises:
        InputError: When ``path`` exists but cannot be read.
    """
    if path is not None:
        try:
            return path.read_bytes()
        except OSError as e:
            raise InputError.read_error(str(path), e.strerror or str(e)) from e
    return read_stream(sys.stdin.buffer)


def load_descriptor_set(path: Path | None = None) -> descriptor_pb2.FileDescriptorSet:
    return decode(read_input(path))
