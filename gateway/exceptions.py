"""DRF exception handler returning the service's error bodies.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``. Malformed JSON maps to
400 ``INVALID_JSON``; other DRF exceptions keep DRF's status with their
detail; anything else is logged with its traceback and answered with 500
``INTERNAL_ERROR`` so no fault escapes as an HTML error page.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("gateway")


def api_exception_handler(exc, context):
    request = context.get("request")
    path = getattr(request, "path", "-")

    if isinstance(exc, ParseError):
        logger.error("Invalid JSON: %s", exc.detail, extra={"path": path})
        return Response({"detail": "INVALID_JSON"}, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is not None:
        logger.warning("request rejected: %s", exc, extra={"path": path, "status": response.status_code})
        return response

    logger.exception("unhandled error", extra={"path": path})
    return Response({"detail": "INTERNAL_ERROR"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
