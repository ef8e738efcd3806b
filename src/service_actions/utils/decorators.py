"""Tracing decorator for source calls and snapshot I/O."""

import functools
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

from opentelemetry.trace import SpanKind, Status, StatusCode

from service_actions.logging import get_logger
from service_actions.logging.filters import run_id_var, run_mode_var
from service_actions.telemetry import get_tracer

F = TypeVar('F', bound=Callable[..., Any])

logger = get_logger(__name__)

AttributeGetter = Callable[..., Optional[Mapping[str, Any]]]


def _span_attributes(
    static: Optional[Mapping[str, Any]],
    getter: Optional[AttributeGetter],
    args: tuple,
    kwargs: dict,
) -> Dict[str, Any]:
    merged: Dict[str, Any] = {
        "service_actions.run_id": run_id_var.get(),
        "service_actions.run_mode": run_mode_var.get(),
    }
    merged.update(static or {})
    if getter is not None:
        try:
            merged.update(getter(*args, **kwargs) or {})
        except Exception as exc:  # pragma: no cover - attributes never break the call
            logger.warning(f"Span attribute getter failed: {exc}")
    # OpenTelemetry rejects None attribute values
    return {key: value for key, value in merged.items() if value is not None}


def _result_size(result: Any) -> Optional[int]:
    records = getattr(result, "records", result)
    try:
        return len(records)
    except TypeError:
        return None


def traced(
    span_name: Optional[str] = None,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Mapping[str, Any]] = None,
    attribute_getter: Optional[AttributeGetter] = None,
) -> Callable[[F], F]:
    """Run the decorated function inside an OpenTelemetry span.

    The span carries the current run id and mode, the static ``attributes``,
    whatever ``attribute_getter(*args, **kwargs)`` returns, and the number
    of records returned (``service_actions.result.count``) when the result
    has a length. Exceptions are recorded on the span and re-raised.

    Args:
        span_name: Span name; defaults to the module-qualified function name
        kind: Span kind
        attributes: Static span attributes
        attribute_getter: Called with the function arguments for per-call attributes
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)
            with tracer.start_as_current_span(
                name,
                kind=kind,
                attributes=_span_attributes(attributes, attribute_getter, args, kwargs),
            ) as span:
                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise
                size = _result_size(result)
                if size is not None:
                    span.set_attribute("service_actions.result.count", size)
                return result

        return wrapper  # type: ignore[return-value]

    return decorator
