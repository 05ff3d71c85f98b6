"""Middleware that tags every request with an id and logs it.

``RequestIdMiddleware`` reuses the incoming ``X-Request-Id`` header or
generates a UUIDv4, stores it on the request and in ``REQUEST_ID_CTX`` so log
records emitted while the request is served carry it, echoes it back in the
``X-Request-ID`` response header, and writes one "request handled" line per
request.

``ApiSizeLimitMiddleware`` rejects request bodies larger than
``API_MAX_BYTES`` before they are parsed.
"""

import contextvars
import logging
import uuid

from django.conf import settings
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")

logger = logging.getLogger("gateway")


class RequestIdMiddleware(MiddlewareMixin):
    """Django middleware that sets and returns a per-request identifier.

    Attributes:
        HEADER (str): Incoming header as found in ``request.META``.
        RESPONSE_HEADER (str): Header added to outgoing responses.
    """

    HEADER = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-ID"

    def process_request(self, request):
        rid = request.META.get(self.HEADER)
        if not rid:
            rid = str(uuid.uuid4())
        request.request_id = rid
        request._request_id_token = REQUEST_ID_CTX.set(rid)

    def process_response(self, request, response):
        """Add the id header, log the request and clear the context var."""
        rid = getattr(request, "request_id", REQUEST_ID_CTX.get())
        response[self.RESPONSE_HEADER] = rid
        logger.info(
            "request handled",
            extra={"path": request.path, "method": request.method, "status": response.status_code},
        )
        token = getattr(request, "_request_id_token", None)
        if token is not None:
            REQUEST_ID_CTX.reset(token)
        return response


class ApiSizeLimitMiddleware(MiddlewareMixin):
    def process_request(self, request):
        limit = getattr(settings, "API_MAX_BYTES", 1024 * 1024)
        clen = request.META.get("CONTENT_LENGTH")
        if clen and clen.isdigit() and int(clen) > limit:
            logger.warning("payload too large", extra={"path": request.path, "content_length": int(clen)})
            return JsonResponse({"detail": "PAYLOAD_TOO_LARGE"}, status=413)
