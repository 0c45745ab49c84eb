"""File server entry point and connection lifecycle."""

from __future__ import annotations

import argparse
import json
import logging
import socket
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from config import (
    ACCEPT_TIMEOUT_SECS,
    BUFFER_SIZE,
    DEBUG,
    HOST,
    LOG_FORMAT,
    PORT,
    SERVER_ROOT,
    SOCKET_TIMEOUT_SECS,
    WORKER_COUNT,
)
from handlers.resource_handler import synthesize_response
from request import HTTPRequest, HTTPRequestParseError
from response import HTTPResponse
from socket_handler import HTTPReadError, read_http_request, write_http_response

logger = logging.getLogger(__name__)


class HTTPServer:
    def __init__(
        self,
        host: str = HOST,
        port: int = PORT,
        root: Path | str = SERVER_ROOT,
        worker_count: int = WORKER_COUNT,
        *,
        buffer_size: int = BUFFER_SIZE,
        log_format: str = LOG_FORMAT,
    ) -> None:
        if worker_count <= 0:
            raise ValueError("worker_count must be positive")
        self.host = host
        self.port = port
        # Captured once; request handling never consults the process cwd.
        self.root = Path(root).resolve()
        self.worker_count = worker_count
        self.buffer_size = buffer_size
        self.log_format = log_format

        self._server_socket: socket.socket | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._running = False

    def start(self) -> None:
        """Bind, listen and hand every accepted connection to a worker."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_socket:
            self._server_socket = server_socket
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(128)
            server_socket.settimeout(ACCEPT_TIMEOUT_SECS)
            self.port = server_socket.getsockname()[1]
            self._executor = ThreadPoolExecutor(
                max_workers=self.worker_count,
                thread_name_prefix="http-worker",
            )
            logger.info("Serving %s on %s:%s", self.root, self.host, self.port)

            self._running = True
            try:
                while self._running:
                    try:
                        client_socket, address = server_socket.accept()
                    except socket.timeout:
                        continue
                    except OSError:
                        break
                    self._executor.submit(self._handle_client, client_socket, address)
            finally:
                self._executor.shutdown(wait=True)
                self._executor = None

    def stop(self) -> None:
        self._running = False
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None

    def _handle_client(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        """Serve exactly one request on ``client_socket`` and close it."""
        with client_socket:
            try:
                self._serve_connection(client_socket, address)
            except Exception:
                logger.exception("Unhandled error serving %s; closing without response", address[0])

    def _serve_connection(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        started_at = time.perf_counter()
        client_socket.settimeout(SOCKET_TIMEOUT_SECS)
        try:
            raw_request = read_http_request(client_socket, self.buffer_size)
        except HTTPReadError as exc:
            logger.warning("Dropping connection from %s: %s", address[0], exc)
            return
        except OSError as exc:
            logger.warning("Socket error reading from %s: %s", address[0], exc)
            return

        if not raw_request:
            return

        try:
            request = HTTPRequest.from_bytes(raw_request)
        except HTTPRequestParseError as exc:
            logger.warning("Dropping malformed request from %s: %s", address[0], exc)
            return

        try:
            response = synthesize_response(request.path, self.root)
        except OSError:
            logger.exception("I/O failure serving %s; closing without response", request.path)
            return

        try:
            with client_socket.makefile("wb") as sink:
                bytes_sent = write_http_response(sink, response)
        except OSError as exc:
            logger.warning("Failed writing response to %s: %s", address[0], exc)
            return

        self._log_access(
            address=address,
            request=request,
            response=response,
            bytes_sent=bytes_sent,
            started_at=started_at,
        )

    def _log_access(
        self,
        *,
        address: tuple[str, int],
        request: HTTPRequest,
        response: HTTPResponse,
        bytes_sent: int,
        started_at: float,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": address[0],
            "method": request.method,
            "path": request.path,
            "target": request.raw_target,
            "status": response.status_code,
            "bytes_out": bytes_sent,
            "duration_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            "client=%s method=%s path=%s target=%s status=%s bytes_out=%s duration_ms=%.2f",
            event["client"],
            event["method"],
            event["path"],
            event["target"],
            event["status"],
            event["bytes_out"],
            duration_ms,
        )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve a directory over HTTP")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--root", default=SERVER_ROOT)
    parser.add_argument("--workers", type=int, default=WORKER_COUNT)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    parser.add_argument("--debug", action="store_true", default=DEBUG)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    server = HTTPServer(
        host=args.host,
        port=args.port,
        root=args.root,
        worker_count=args.workers,
        log_format=args.log_format,
    )
    try:
        server.start()
    except KeyboardInterrupt:
        server.stop()


if __name__ == "__main__":
    main()
