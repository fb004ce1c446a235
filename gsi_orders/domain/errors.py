# gsi_orders/domain/errors.py
from typing import Any, Dict


class ShopError(Exception):
    """
    Base for errors raised by the service layer.

    `error` is the short label every response body carries, `message` the
    optional human readable explanation. Extra keyword arguments end up in
    the response body as they are (e.g. isSaved, session_id, details).
    """

    status_code = 500

    def __init__(self, error: str, message: str | None = None, **extra: Any):
        super().__init__(message or error)
        self.error = error
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        body.update(self.extra)
        return body


class InvalidInput(ShopError):
    status_code = 400


class Unauthorized(ShopError):
    status_code = 401


class NotFound(ShopError):
    status_code = 404


class Conflict(ShopError):
    status_code = 409


class InternalError(ShopError):
    status_code = 500


class UpstreamError(ShopError):
    """Failure reported by an external provider (payments, LLM)."""

    def __init__(self, error: str, message: str | None = None, status_code: int = 500, **extra: Any):
        super().__init__(error, message, **extra)
        self.status_code = status_code
