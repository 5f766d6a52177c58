"""
Centralized error handling: response shape, trace ids and log redaction
"""

import logging

import httpx
import pytest

from utils.error_handling import ErrorHandlingConfig


class TestErrorResponses:

    @pytest.mark.asyncio
    async def test_not_found_body_shape(self, client, auth_headers):
        response = await client.get("/users/invalid_user_id", headers=auth_headers)

        body = response.json()
        assert body["error"] == "HTTP 404"
        assert body["message"] == "User not found"
        assert "timestamp" in body
        assert body["trace_id"] == response.headers["X-Trace-ID"]

    @pytest.mark.asyncio
    async def test_every_response_has_trace_id(self, client, auth_headers):
        response = await client.get("/users", headers=auth_headers)

        assert response.status_code == 200
        assert len(response.headers["X-Trace-ID"]) == 8

    @pytest.mark.asyncio
    async def test_validation_details_name_the_field(self, client, auth_headers):
        response = await client.post("/users", headers=auth_headers, json={"name": "", "password": "x"})

        body = response.json()
        assert response.status_code == 400
        assert body["error"] == "Validation Error"
        fields = [detail["field"] for detail in body["detail"]]
        assert "body -> name" in fields
        assert "body -> email" in fields

    @pytest.mark.asyncio
    async def test_unknown_route_uses_json_body(self, client, auth_headers):
        response = await client.get("/nowhere", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Not Found"

    @pytest.mark.asyncio
    async def test_unhandled_exception_is_hidden(self, app):
        @app.get("/boom")
        async def boom():
            raise ValueError("secret internals")

        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
            response = await http_client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "An unexpected error occurred"
        assert "secret internals" not in response.text
        assert response.headers["X-Trace-ID"] == response.json()["trace_id"]


class TestLogRedaction:

    @pytest.mark.asyncio
    async def test_passwords_and_tokens_never_logged(self, client, auth_headers, admin_token, caplog):
        caplog.set_level(logging.ERROR, logger="utils.error_handling")

        await client.post(
            "/users",
            headers=auth_headers,
            json={"name": "", "email": "a@b.com", "password": "super-secret-pw"}
        )

        assert "***REDACTED***" in caplog.text
        assert "super-secret-pw" not in caplog.text
        assert admin_token not in caplog.text

    def test_sanitize_nested_data(self):
        data = {"user": {"name": "a", "password": "pw"}, "items": [{"api_key": "k"}], "Authorization": "Bearer x"}

        sanitized = ErrorHandlingConfig.sanitize_data(data)

        assert sanitized == {
            "user": {"name": "a", "password": "***REDACTED***"},
            "items": [{"api_key": "***REDACTED***"}],
            "Authorization": "***REDACTED***"
        }

    def test_sanitize_truncates_long_strings(self):
        sanitized = ErrorHandlingConfig.sanitize_data("x" * (ErrorHandlingConfig.MAX_BODY_LOG_SIZE + 10))

        assert sanitized.endswith("...[TRUNCATED]")

    def test_sanitize_body(self):
        assert ErrorHandlingConfig.sanitize_body(b'{"password": "pw", "name": "a"}') == {
            "password": "***REDACTED***",
            "name": "a"
        }
        assert ErrorHandlingConfig.sanitize_body(b"plain text") == "plain text"
        assert ErrorHandlingConfig.sanitize_body(b"\xff\xfe") == "DECODE_ERROR"
        assert ErrorHandlingConfig.sanitize_body(None) is None
