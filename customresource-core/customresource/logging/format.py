"""Log formatting which tags every record with the lifecycle event it was logged for."""
import logging
from contextvars import ContextVar, Token
from typing import Mapping, Optional

LOG_FORMAT = (
    "%(asctime)s.%(msecs)03d %(levelname)-7s [%(request_id)s %(logical_resource_id)s] "
    "%(name)s : %(message)s"
)
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# placeholder for records logged outside of a lifecycle event
NO_REQUEST = "-"

# correlation fields of the lifecycle event handled in the current context
request_context: ContextVar[Optional[Mapping[str, str]]] = ContextVar(
    "request_context", default=None
)


def bind_request(request: Mapping) -> Token:
    """
    Make the correlation fields of the given lifecycle event available to log records emitted in the
    current context, including worker threads started through ``run_sync``.

    :param request: the lifecycle event
    :return: the token to pass to ``request_context.reset`` once the event is handled
    """
    return request_context.set(
        {
            "RequestId": request.get("RequestId"),
            "LogicalResourceId": request.get("LogicalResourceId"),
        }
    )


class RequestContextFilter(logging.Filter):
    """
    Filter that adds the ``request_id`` and ``logical_resource_id`` of the lifecycle event being
    handled to each record, or ``NO_REQUEST`` if there is none.
    """

    def filter(self, record):
        context = request_context.get() or {}
        record.request_id = context.get("RequestId") or NO_REQUEST
        record.logical_resource_id = context.get("LogicalResourceId") or NO_REQUEST
        return True


class DefaultFormatter(logging.Formatter):
    """
    A formatter that uses ``LOG_FORMAT`` and ``LOG_DATE_FORMAT``. Needs ``RequestContextFilter``.
    """

    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT):
        super().__init__(fmt=fmt, datefmt=datefmt)
