"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class OpenClawError(Exception):
    """Base exception for homebridge-openclaw."""

    exit_code: int = 1
    http_status: int = 500
    title: str = "Internal Server Error"


class ConfigurationError(OpenClawError):
    """No usable way to authenticate with the hub."""

    exit_code = 6
    http_status = 502
    title = "Upstream error"


class UpstreamCallError(OpenClawError):
    """Non-success status from a hub read or write call."""

    exit_code = 2
    http_status = 502
    title = "Upstream error"

    def __init__(self, status_code: int | None, body: str = "", *, action: str = "") -> None:
        self.status_code = status_code
        self.body = body
        prefix = f"{action} → " if action else ""
        super().__init__(f"{prefix}{status_code}: {body}" if body else f"{prefix}{status_code}")


class HubConnectionError(UpstreamCallError):
    """The hub could not be reached at all."""

    def __init__(self, message: str) -> None:
        OpenClawError.__init__(self, message)
        self.status_code = None
        self.body = message


class UpstreamAuthError(OpenClawError):
    """The hub rejected the login call."""

    exit_code = 3
    http_status = 502
    title = "Upstream error"

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Config UI login failed ({status_code}): {body}")


class UnauthorizedError(OpenClawError):
    """Caller presented a missing or wrong bearer token."""

    exit_code = 3
    http_status = 401
    title = "Unauthorized"

    def __init__(self, message: str = "Invalid or missing Bearer token.") -> None:
        super().__init__(message)


class NotFoundError(OpenClawError):
    """Device id absent from the current snapshot."""

    exit_code = 4
    http_status = 404
    title = "Not Found"


class ValidationError(OpenClawError):
    """Missing field or unknown action name."""

    exit_code = 7
    http_status = 400
    title = "Bad Request"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or "Validation error")


def error_handler(func: F) -> F:
    """Decorator that catches OpenClawError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except OpenClawError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
