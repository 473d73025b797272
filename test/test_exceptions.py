"""
Tests for custom exception classes and their HTTP rendering

Tests exception initialization, messages, status codes, details and the
error envelope produced by the registered handlers.
"""

from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from app.exception_handlers import get_error_type, register_exception_handlers
from app.exceptions import (
    ContentNotFoundError,
    ContentTypeNotFoundError,
    DatabaseError,
    FieldTypeError,
    LocaleConfigurationError,
    LocaleMismatchError,
    MalformedOverlayError,
    ResourceNotFoundError,
    TranslateError,
    UnknownFieldError,
)


class TestTranslateError:
    """Test base TranslateError class"""

    def test_default(self):
        exc = TranslateError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details == {}

    def test_with_custom_status_and_details(self):
        exc = TranslateError("Test error", status_code=status.HTTP_400_BAD_REQUEST, details={"key": "value"})
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.details["key"] == "value"


class TestNotFoundExceptions:
    """Test resource not found exceptions"""

    def test_resource_without_id(self):
        exc = ResourceNotFoundError("Content")
        assert exc.message == "Content not found"
        assert exc.status_code == status.HTTP_404_NOT_FOUND

    def test_content_not_found(self):
        exc = ContentNotFoundError(42)
        assert exc.message == "Content with id '42' not found"
        assert exc.details == {"resource_type": "Content", "resource_id": 42}

    def test_content_type_not_found(self):
        exc = ContentTypeNotFoundError("products")
        assert isinstance(exc, ResourceNotFoundError)
        assert exc.details["resource_id"] == "products"


class TestOverlayExceptions:
    """Test field and overlay exceptions"""

    def test_field_type_error(self):
        exc = FieldTypeError("blocks", "a list of repeated items", "text")
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert "blocks" in exc.message
        assert "str" in exc.message
        assert exc.details == {"field": "blocks", "expected": "a list of repeated items"}

    def test_malformed_overlay_is_server_error(self):
        exc = MalformedOverlayError("fr_data", "Expecting value")
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details == {"slot": "fr_data"}

    def test_unknown_field_error(self):
        exc = UnknownFieldError("fr_data", "pages")
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.message == "'fr_data' is not a field of content type 'pages'"
        assert exc.details == {"field": "fr_data", "contenttype": "pages"}

    def test_locale_mismatch_error(self):
        exc = LocaleMismatchError("fr", "en")
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert "'fr'" in exc.message
        assert exc.details == {"record_locale": "fr", "active_locale": "en"}

    def test_locale_configuration_error(self):
        exc = LocaleConfigurationError()
        assert exc.message == "Invalid locale configuration"

    def test_database_error_operation(self):
        assert DatabaseError("boom", operation="save").details == {"operation": "save"}
        assert DatabaseError().details == {}


class TestExceptionHandlers:
    """Test the JSON error envelope"""

    def _client(self) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/missing")
        async def missing():
            raise ContentNotFoundError(7)

        @app.get("/broken")
        async def broken():
            raise MalformedOverlayError("fr_data", "Expecting value")

        @app.get("/crash")
        async def crash():
            raise RuntimeError("secret detail")

        return TestClient(app, raise_server_exceptions=False)

    def test_translate_error_envelope(self):
        response = self._client().get("/missing")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["type"] == "Not Found"
        assert error["path"] == "/missing"
        assert error["details"]["resource_id"] == 7

    def test_malformed_overlay_is_500(self):
        response = self._client().get("/broken")
        assert response.status_code == 500
        assert response.json()["error"]["details"] == {"slot": "fr_data"}

    def test_unhandled_error_hides_details(self):
        response = self._client().get("/crash")
        assert response.status_code == 500
        assert "secret" not in response.text

    def test_unknown_route(self):
        response = self._client().get("/nowhere")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Not Found"

    def test_get_error_type_fallback(self):
        assert get_error_type(418) == "Error"
        assert get_error_type(422) == "Validation Error"
