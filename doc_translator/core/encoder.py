"""Base64 encoding of user-selected files."""

from __future__ import annotations

import asyncio
import base64
from pathlib import Path
from typing import BinaryIO, Union

FileSource = Union[bytes, bytearray, str, Path, BinaryIO]


def encode_bytes(content: bytes) -> str:
    """Encode raw bytes as a text-safe base64 payload."""
    return base64.b64encode(content).decode("ascii")


def decode_payload(payload: str) -> bytes:
    """Turn an encoded payload back into the original bytes."""
    return base64.b64decode(payload)


def read_source(source: FileSource) -> bytes:
    """
    Read the raw content of a file source.

    Args:
        source: Raw bytes, a filesystem path, or a binary file-like object
            (such as a Streamlit upload)

    Returns:
        The file content

    Raises:
        OSError: If the file cannot be read
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()

    if hasattr(source, "seek"):
        source.seek(0)
    return source.read()


def encode_file(source: FileSource) -> str:
    """Read a file source and return its base64 payload."""
    return encode_bytes(read_source(source))


async def encode_file_async(source: FileSource) -> str:
    """
    Encode a file source without blocking the event loop.

    Raises:
        OSError: If reading the file fails
    """
    content = await asyncio.to_thread(read_source, source)
    return encode_bytes(content)
