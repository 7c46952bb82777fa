# src/task_tracker/core/envelope.py

"""
Response envelope for whatever transport sits in front of the core.

respond() runs one operation and turns its outcome into (status, body):
- success            -> 200/201, {"success": True, <key>: <serialized result>}
- ValidationError    -> 400, {"success": False, "errors": [...]}
- NotFoundError      -> 404, {"success": False, "message": "..."}
- completion/delete
  rule violations    -> 400, {"success": False, "message": "..."}
- anything else      -> 500, logged with traceback
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from .errors import NotFoundError, TaskTrackerError, ValidationError
from .ports import Serializable

logger = logging.getLogger(__name__)

R = TypeVar("R")

Response = tuple[int, dict[str, Any]]


def serialize(result: Any) -> Any:
    if result is None:
        return None
    if isinstance(result, dict):
        return result
    if hasattr(result, "to_dict"):
        entity: Serializable = result
        return entity.to_dict()
    if isinstance(result, Iterable) and not isinstance(result, (str, bytes)):
        return [serialize(item) for item in result]
    return result


def error_response(exc: BaseException) -> Response:
    if isinstance(exc, ValidationError):
        return 400, {"success": False, "errors": list(exc.errors)}
    if isinstance(exc, NotFoundError):
        return 404, {"success": False, "message": str(exc)}
    if isinstance(exc, TaskTrackerError):
        # AlreadyDoneError, DependenciesUnmetError, ReferentialIntegrityError
        return 400, {"success": False, "message": str(exc)}
    return 500, {"success": False, "message": "Internal server error", "error": str(exc)}


def respond(
    operation: Callable[[], R],
    *,
    key: str | None = None,
    message: str | None = None,
    status: int = 200,
) -> Response:
    """
    Run `operation` and wrap its outcome.

    key: name of the payload field ("task", "tasks", "user", ...); None omits it.
    message: optional human-readable success message.
    """
    try:
        result = operation()
    except TaskTrackerError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Unexpected error while handling an operation.")
        return error_response(exc)

    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if key is not None:
        body[key] = serialize(result)
    return status, body
