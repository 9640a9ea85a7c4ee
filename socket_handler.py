"""Asyncio stream read/write utilities."""

from __future__ import annotations

import asyncio
from pathlib import Path

from config import FILE_CHUNK_SIZE, MAX_HEADER_BYTES, READ_CHUNK_SIZE, SOCKET_TIMEOUT_SECS
from response import HTTPResponse, prepare_response


class HTTPReadError(Exception):
    """Raised when a client request cannot be safely read from the stream."""

    status_code = 400


class MalformedRequestError(HTTPReadError):
    """Raised when stream bytes do not form a complete HTTP request head."""


class HeaderTooLargeError(HTTPReadError):
    """Raised when HTTP headers exceed configured maximum size."""

    status_code = 431


class SocketTimeoutError(HTTPReadError):
    """Raised when a client times out while sending request bytes."""

    status_code = 408


class FileStreamError(OSError):
    """Raised when a file ends before its advertised Content-Length."""


async def read_http_request_head(
    reader: asyncio.StreamReader,
    *,
    timeout_secs: float = SOCKET_TIMEOUT_SECS,
) -> bytes:
    """Read bytes up to and including the blank line ending the request head.

    Returns ``b""`` when the client closes the connection without sending
    anything.
    """
    buffer = bytearray()

    while True:
        header_end_index = buffer.find(b"\r\n\r\n")
        if header_end_index != -1:
            header_section_length = header_end_index + 4
            if header_section_length > MAX_HEADER_BYTES:
                raise HeaderTooLargeError("Headers exceeded MAX_HEADER_BYTES")
            return bytes(buffer[:header_section_length])

        if len(buffer) > MAX_HEADER_BYTES:
            raise HeaderTooLargeError("Headers exceeded MAX_HEADER_BYTES")

        try:
            chunk = await asyncio.wait_for(reader.read(READ_CHUNK_SIZE), timeout=timeout_secs)
        except asyncio.TimeoutError as exc:
            raise SocketTimeoutError("Timed out waiting for request bytes") from exc

        if not chunk:
            if not buffer:
                return b""
            raise MalformedRequestError("Connection closed before request head completed")

        buffer.extend(chunk)


async def write_http_response(
    writer: asyncio.StreamWriter,
    response: HTTPResponse,
    *,
    send_body: bool = True,
    chunk_size: int = FILE_CHUNK_SIZE,
) -> int:
    """Write an HTTPResponse, streaming file bodies chunk by chunk."""
    head = prepare_response(response)
    writer.write(head)
    await writer.drain()
    bytes_sent = len(head)

    if not send_body:
        return bytes_sent

    if response.file_path is None:
        if response.body:
            writer.write(response.body)
            await writer.drain()
            bytes_sent += len(response.body)
        return bytes_sent

    bytes_sent += await _stream_file(
        writer,
        response.file_path,
        response.content_length or 0,
        chunk_size=chunk_size,
    )
    return bytes_sent


async def _stream_file(
    writer: asyncio.StreamWriter,
    file_path: Path,
    content_length: int,
    *,
    chunk_size: int,
) -> int:
    loop = asyncio.get_running_loop()
    file_obj = await loop.run_in_executor(None, file_path.open, "rb")
    remaining = content_length
    try:
        while remaining > 0:
            chunk = await loop.run_in_executor(None, file_obj.read, min(chunk_size, remaining))
            if not chunk:
                raise FileStreamError(f"{file_path} ended {remaining} bytes early")
            writer.write(chunk)
            await writer.drain()
            remaining -= len(chunk)
    finally:
        file_obj.close()
    return content_length
