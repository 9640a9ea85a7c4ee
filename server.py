"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import asyncio
import logging
import sys
import time

from config import ENTRY_PAGES, LISTEN_BACKLOG, ServerConfig
from handlers.static_handlers import landing_page, serve_file
from request import HTTPRequest, HTTPRequestParseError
from response import HTTPResponse, plain_text
from router import Router
from socket_handler import HTTPReadError, read_http_request_head, write_http_response
from utils import resolve_path

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "HEAD")


class HTTPServer:
    def __init__(self, config: ServerConfig | None = None, router: Router | None = None) -> None:
        self.config = config or ServerConfig.from_env()
        self.router = router or self._build_default_router()
        self.host = self.config.host
        self.port = self.config.port

        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event: asyncio.Event | None = None

    def _build_default_router(self) -> Router:
        router = Router()
        router.add_route("GET", "/", landing_page)
        return router

    def start(self) -> None:
        """Run the event loop in the current thread until :meth:`stop` is called."""
        asyncio.run(self.serve())

    async def serve(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        server = await asyncio.start_server(
            self._handle_client,
            self.host,
            self.config.port,
            backlog=LISTEN_BACKLOG,
            reuse_address=True,
        )
        self.port = server.sockets[0].getsockname()[1]
        self._announce()

        async with server:
            await self._stop_event.wait()

    def stop(self) -> None:
        """Ask a running server to close its listener; safe from any thread."""
        loop, stop_event = self._loop, self._stop_event
        if loop is None or stop_event is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(stop_event.set)

    def _announce(self) -> None:
        base_url = f"http://localhost:{self.port}/"
        print(f"Dev server running at {base_url}")
        for label, page in ENTRY_PAGES.items():
            print(f"{label}: {base_url}{page}")
        sys.stdout.flush()

    async def _handle_client(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        started_at = time.perf_counter()
        request: HTTPRequest | None = None
        try:
            try:
                raw_head = await read_http_request_head(reader)
            except HTTPReadError as exc:
                logger.debug("Rejected request head: %s", exc)
                response = plain_text(exc.status_code)
            else:
                if not raw_head:
                    return
                try:
                    request = HTTPRequest.from_bytes(raw_head)
                except HTTPRequestParseError as exc:
                    logger.debug("Rejected request head: %s", exc)
                    response = plain_text(exc.status_code)
                else:
                    response = await self._dispatch(request)

            send_body = request is None or request.method != "HEAD"
            bytes_sent = await write_http_response(writer, response, send_body=send_body)
            self._log_request(writer, request, response, bytes_sent, started_at)
        except OSError as exc:
            logger.warning(
                "Aborted response for %s %s: %s",
                request.method if request else "-",
                request.path if request else "-",
                exc,
            )
            writer.transport.abort()
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass

    async def _dispatch(self, request: HTTPRequest) -> HTTPResponse:
        if request.method not in ALLOWED_METHODS:
            response = plain_text(405)
            response.headers["Allow"] = ", ".join(ALLOWED_METHODS)
            return response

        try:
            handler = self.router.resolve(request.method, request.path)
            if handler is not None:
                return handler(request)

            lookup_path = request.path
            if lookup_path.endswith("/"):
                lookup_path += "index.html"
            file_path = resolve_path(self.config.base_dir, lookup_path)
            return await serve_file(file_path, self.config.base_dir)
        except Exception:
            logger.exception("Unhandled error while serving %s %s", request.method, request.path)
            return plain_text(500)

    def _log_request(
        self,
        writer: asyncio.StreamWriter,
        request: HTTPRequest | None,
        response: HTTPResponse,
        bytes_sent: int,
        started_at: float,
    ) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        peer = writer.get_extra_info("peername") or ("-", 0)
        logger.debug(
            "client=%s method=%s path=%s status=%s bytes_out=%s duration_ms=%.2f",
            peer[0],
            request.method if request else "-",
            request.path if request else "-",
            response.status_code,
            bytes_sent,
            (time.perf_counter() - started_at) * 1000,
        )


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    config = ServerConfig.from_env()
    server = HTTPServer(config)
    try:
        server.start()
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        logger.error("Could not listen on %s:%s: %s", config.host, config.port, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
