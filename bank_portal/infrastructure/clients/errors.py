"""Translation of non-success HTTP responses into gateway errors"""

import httpx

from bank_portal.domain.exceptions import GatewayError


def server_message(response: httpx.Response) -> str | None:
    """Return the `message` field of an error body, if the body has one"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return None


def error_from_response(
    response: httpx.Response,
    error_cls: type[GatewayError] = GatewayError,
) -> GatewayError:
    """
    Build a gateway error from a non-2xx response.

    Prefers the server-provided message; falls back to
    "API error: <status> <reason phrase>".
    """
    message = server_message(response)
    if message is None:
        message = f"API error: {response.status_code} {response.reason_phrase}".rstrip()
    return error_cls(message, status_code=response.status_code)
