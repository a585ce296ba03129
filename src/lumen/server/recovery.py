"""Panic recovery — the exception boundary around middleware and handlers.

Anything a handler raises stops at ``guard()``. The exception is
normalized, logged, handed to the user's recovery callback if one is
registered, and the dispatcher carries on to finalize whatever the
handler had written so far.
"""

import logging
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lumen.errors import Panic, RecoveredError
from lumen.http.request import Request

STACK_LIMIT = 8 * 1024


@dataclass(frozen=True, slots=True)
class PanicInfo:
    """Details of a recovered failure, passed to the recovery callback.

    ``stack`` is the formatted traceback, UTF-8 encoded and cut to the
    router's stack limit.
    """

    error: Exception
    stack: bytes
    request: Request


# Recovery callback registered with Router.recovery()
type RecoverFunc = Callable[[PanicInfo], Any]


def normalize_panic(exc: Exception) -> Exception:
    """Turn whatever was raised into a proper exception value.

    ``Panic`` payloads are unwrapped: exceptions pass through, strings and
    anything else become ``RecoveredError``. Other exceptions are returned
    unchanged.
    """
    if not isinstance(exc, Panic):
        return exc
    value = exc.value
    if isinstance(value, Exception):
        return value
    if isinstance(value, str):
        return RecoveredError(value)
    return RecoveredError(str(value))


def capture_stack(limit: int = STACK_LIMIT) -> bytes:
    """Snapshot the traceback of the exception being handled, at most *limit* bytes."""
    return traceback.format_exc().encode("utf-8")[:limit]


def guard(
    request: Request,
    recovery: RecoverFunc | None,
    body: Callable[[], Any],
    *,
    logger: logging.Logger,
    stack_limit: int = STACK_LIMIT,
) -> PanicInfo | None:
    """Run *body*, recovering from any exception it raises.

    Returns the ``PanicInfo`` when a failure was recovered, ``None`` when
    *body* completed. Only ``Exception`` subclasses are caught: any other
    ``BaseException`` (``KeyboardInterrupt``, ``SystemExit``, ``GeneratorExit``
    or a user-defined one) propagates. A recovery callback that fails is
    logged and otherwise ignored.
    """
    try:
        body()
    except Exception as exc:
        error = normalize_panic(exc)
        info = PanicInfo(error=error, stack=capture_stack(stack_limit), request=request)

        logger.error(
            "recovered from panic",
            extra={"request_id": request.request_id, "error": str(error) or repr(error)},
        )

        if recovery is not None:
            try:
                recovery(info)
            except Exception:
                logger.exception(
                    "recovery handler failed",
                    extra={"request_id": request.request_id},
                )
        return info
    return None
