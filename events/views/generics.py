from rest_framework.response import Response
from rest_framework import status


def api_error(message: str, status_code=status.HTTP_400_BAD_REQUEST, details: str = None):
    """
    Small helper to standardize error responses across the events app.
    Always returns: {"error": "<message>"} (plus "details" when given).
    """
    body = {"error": message}
    if details:
        body["details"] = details
    return Response(body, status=status_code)


def parse_int_param(value):
    """Query-string integer, or None when absent/garbled."""
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
