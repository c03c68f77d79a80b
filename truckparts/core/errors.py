"""
Error types for upstream services

Routes catch these at the boundary and turn them into JSON or SSE error events.
"""

from typing import Any, Optional

import httpx


class CatalogAPIError(Exception):
    """Failure talking to the parts catalog API"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.original_error = original_error


class DialogueBackendError(Exception):
    """Non-2xx reply from the dialogue backend"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        server_response: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_response = server_response


STATUS_MESSAGES = {
    401: "Authentication failed. Please check your API key.",
    403: "Access forbidden. You may not have permission to access this resource.",
    404: "Resource not found.",
    429: "Rate limit exceeded. Please try again later.",
    500: "Internal server error. Please try again later.",
}


def _response_message(response: httpx.Response) -> Optional[str]:
    """Pull a `message` field out of an error body, if it is JSON"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def handle_api_error(error: BaseException) -> CatalogAPIError:
    """
    Map any catalog failure onto a CatalogAPIError with a readable message

    Known HTTP statuses get fixed wording, connection failures get a
    connectivity hint, everything else keeps its own message.
    """
    if isinstance(error, CatalogAPIError):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code

        if status_code in STATUS_MESSAGES:
            return CatalogAPIError(STATUS_MESSAGES[status_code], status_code, error)

        message = (
            _response_message(error.response)
            or error.response.reason_phrase
            or "API request failed"
        )
        return CatalogAPIError(message, status_code, error)

    if isinstance(error, httpx.ConnectError):
        return CatalogAPIError(
            "Unable to connect to Intella Parts API. Please check your internet connection.",
            None,
            error
        )

    return CatalogAPIError(str(error) or "An unexpected error occurred", None, error)
