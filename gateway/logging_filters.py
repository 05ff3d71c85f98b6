"""Logging filters for enriching log records with request context.

Adding ``RequestIdFilter`` to a handler lets formatters reference
``%(request_id)s`` on every record, including records emitted outside a
request (startup, management commands) where the id is ``"-"``.
"""

from logging import Filter, LogRecord

from .middleware import REQUEST_ID_CTX


class RequestIdFilter(Filter):
    """Attach a ``request_id`` attribute to log records.

    The value comes from the ``REQUEST_ID_CTX`` ContextVar set by
    ``RequestIdMiddleware``.
    """

    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = REQUEST_ID_CTX.get()
        return True
