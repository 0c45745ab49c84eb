"""Configuration constants for the file server."""

HOST: str = "127.0.0.1"
PORT: int = 5500
BUFFER_SIZE: int = 1024
SERVER_ROOT: str = "."
HTTP_VERSION: str = "HTTP/1.1"
SOCKET_TIMEOUT_SECS: int = 5
ACCEPT_TIMEOUT_SECS: float = 0.2
WORKER_COUNT: int = 8
SNIFF_BYTES: int = 8192
LOG_FORMAT: str = "plain"
DEBUG: bool = False
