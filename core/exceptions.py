from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("scheduler")


def _flatten(detail, prefix=""):
    """
    Turn DRF's nested error detail into ["field: message", ...].
    """
    if isinstance(detail, dict):
        messages = []
        for key, value in detail.items():
            label = "" if key in ("non_field_errors", "detail") else key
            nested = f"{prefix}.{label}" if prefix and label else (label or prefix)
            messages.extend(_flatten(value, nested))
        return messages

    if isinstance(detail, list):
        messages = []
        for index, value in enumerate(detail):
            # List-of-dicts (many=True) keeps the row index in the path
            nested = f"{prefix}[{index}]" if isinstance(value, dict) else prefix
            messages.extend(_flatten(value, nested))
        return messages

    text = str(detail)
    return [f"{prefix}: {text}" if prefix else text]


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            message = _first_message(value)
            if message:
                return message
        return None
    if isinstance(detail, list):
        for value in detail:
            message = _first_message(value)
            if message:
                return message
        return None
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into {"error": str, "details"?: str}.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it (validation, auth, permission, 404, throttling), wrap it
    if response is not None:
        detail = response.data
        body = {"error": _first_message(detail) or "Request failed"}

        messages = _flatten(detail)
        if len(messages) > 1 or (messages and messages[0] != body["error"]):
            body["details"] = "; ".join(messages)

        response.data = body
        return response

    # Unhandled exceptions (store failures included) -> 500
    view = context.get("view")
    logger.exception(
        f"Unhandled API exception in {view.__class__.__name__ if view else 'unknown view'}",
        exc_info=exc,
    )

    return Response(
        {
            "error": "Internal server error.",
            "details": exc.__class__.__name__,
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
