"""Tests for catalog error mapping."""

import httpx
import pytest

from truckparts.core.errors import CatalogAPIError, handle_api_error

REQUEST = httpx.Request("GET", "http://catalog.test/search/parts")


def status_error(status_code: int, **kwargs) -> httpx.HTTPStatusError:
    response = httpx.Response(status_code, request=REQUEST, **kwargs)
    return httpx.HTTPStatusError("failed", request=REQUEST, response=response)


class TestHandleApiError:
    @pytest.mark.parametrize(
        "status_code,message",
        [
            (401, "Authentication failed. Please check your API key."),
            (403, "Access forbidden. You may not have permission to access this resource."),
            (404, "Resource not found."),
            (429, "Rate limit exceeded. Please try again later."),
            (500, "Internal server error. Please try again later."),
        ],
    )
    def test_known_statuses(self, status_code, message):
        error = handle_api_error(status_error(status_code))

        assert error.status_code == status_code
        assert error.message == message
        assert isinstance(error.original_error, httpx.HTTPStatusError)

    def test_other_status_uses_body_message(self):
        error = handle_api_error(status_error(422, json={"message": "year must be numeric"}))

        assert error.status_code == 422
        assert error.message == "year must be numeric"

    def test_other_status_falls_back_to_reason_phrase(self):
        error = handle_api_error(status_error(502, text="<html>bad gateway</html>"))
        assert error.message == "Bad Gateway"

    def test_unknown_status_without_reason(self):
        error = handle_api_error(status_error(599))
        assert error.message == "API request failed"

    def test_connect_error(self):
        error = handle_api_error(httpx.ConnectError("refused", request=REQUEST))

        assert error.status_code is None
        assert error.message == (
            "Unable to connect to Intella Parts API. Please check your internet connection."
        )

    def test_catalog_error_passes_through(self):
        original = CatalogAPIError("already mapped", 418)
        assert handle_api_error(original) is original

    def test_generic_error_keeps_message(self):
        error = handle_api_error(RuntimeError("boom"))
        assert error.message == "boom"
        assert error.status_code is None

    def test_generic_error_without_message(self):
        assert handle_api_error(RuntimeError()).message == "An unexpected error occurred"
