# src/tasklist_client/core/errors.py

from __future__ import annotations

# status_code values with a fixed meaning on the client side
NETWORK_ERROR_STATUS = 0
TIMEOUT_STATUS = 408


class HttpError(Exception):
    """
    A failed remote call.

    status_code:
    - 0: network / unknown failure (nothing usable came back)
    - 408: the call did not finish within the client timeout
    - anything else: the HTTP status the server answered with
    """

    def __init__(self, message: str, status_code: int = NETWORK_ERROR_STATUS) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)

    def __repr__(self) -> str:
        return f"HttpError(message={self.message!r}, status_code={self.status_code})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpError):
            return NotImplemented
        return (self.message, self.status_code) == (other.message, other.status_code)

    def __hash__(self) -> int:
        return hash((self.message, self.status_code))

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def is_network_error(self) -> bool:
        return self.status_code == NETWORK_ERROR_STATUS

    @property
    def is_timeout(self) -> bool:
        return self.status_code == TIMEOUT_STATUS

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def as_http_error(exc: BaseException, default_message: str = "An unexpected error occurred") -> HttpError:
    """Normalize any failure into an HttpError (unknown failures get status 0)."""
    if isinstance(exc, HttpError):
        return exc
    msg = str(exc).strip() or default_message
    return HttpError(msg, NETWORK_ERROR_STATUS)
