"""Audit interception for controller methods."""

import functools
import inspect
import logging
from typing import Any, Callable

from taskroster.audit.dispatcher import dispatcher
from taskroster.audit.serialization import to_json
from taskroster.errors import AuditSerializationError
from taskroster.models import AuditRecord
from taskroster.observability.metrics import metrics

logger = logging.getLogger("taskroster.audit")


def _call_arguments(signature: inspect.Signature, args: tuple, kwargs: dict) -> list[Any]:
    """Arguments in signature order, without ``self``."""
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return [*args[1:], *kwargs.values()]
    bound.apply_defaults()
    values: list[Any] = []
    for name, value in list(bound.arguments.items())[1:]:
        kind = signature.parameters[name].kind
        if kind is inspect.Parameter.VAR_POSITIONAL:
            values.extend(value)
        elif kind is inspect.Parameter.VAR_KEYWORD:
            values.extend(value.values())
        else:
            values.append(value)
    return values


def _emit(func: Callable, signature: inspect.Signature, args: tuple, kwargs: dict, outcome: Any) -> None:
    try:
        target = type(args[0])
        record = AuditRecord(
            target=f"{target.__module__}.{target.__qualname__}",
            method=func.__name__,
            args=_call_arguments(signature, args, kwargs),
            result=outcome,
        )
        payload = to_json(record)
        logger.debug(f"JSON: {payload}")
        task = dispatcher.dispatch(payload)
        logger.debug(f"Audit dispatch: {task}")
    except AuditSerializationError as e:
        metrics.inc_counter("audit.serialization_errors")
        logger.debug(f"Error processing audit record for {func.__qualname__}", exc_info=e)
    except Exception as e:
        # Runs inside the wrapper's finally; must not replace the call's outcome
        metrics.inc_counter("audit.errors")
        logger.debug(f"Audit failed for {func.__qualname__}", exc_info=e)


def audited(func: Callable) -> Callable:
    """
    Audit every call of a controller method.

    The wrapped method's result is returned, or its exception re-raised,
    untouched. Once the call finishes either way, a record of the handler
    class, method name, arguments and result (the exception on failure) is
    serialized and handed to the dispatcher. Serialization failures, and
    any other error on the audit path, are logged and dropped.
    """
    signature = inspect.signature(func)

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            outcome = None
            try:
                outcome = await func(*args, **kwargs)
                return outcome
            except Exception as e:
                outcome = e
                raise
            finally:
                _emit(func, signature, args, kwargs, outcome)

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        outcome = None
        try:
            outcome = func(*args, **kwargs)
            return outcome
        except Exception as e:
            outcome = e
            raise
        finally:
            _emit(func, signature, args, kwargs, outcome)

    return wrapper
