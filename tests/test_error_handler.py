"""
Unit tests for error context and error types
"""

from starlette.requests import Request

from order_service.utils.error_handler import DatabaseError, ErrorContext, ValidationFailed

def make_request(headers=None, client=("10.0.0.5", 5000)):
    scope = {
        "type": "http",
        "method": "DELETE",
        "path": "/orders/3",
        "raw_path": b"/orders/3",
        "query_string": b"",
        "headers": [(key.encode(), value.encode()) for key, value in (headers or {}).items()],
        "client": client,
        "server": ("testserver", 80),
        "scheme": "http",
    }
    return Request(scope)

class TestErrorContext:
    """Test cases for ErrorContext"""

    def test_log_extra(self):
        context = ErrorContext(make_request())
        extra = context.as_log_extra()
        assert extra["endpoint"] == "/orders/3"
        assert extra["method"] == "DELETE"
        assert extra["client_ip"] == "10.0.0.5"
        assert extra["request_id"] == context.request_id
        assert set(vars(context)) == {"request_id", "endpoint", "method", "client_ip"}

    def test_forwarded_for_wins(self):
        context = ErrorContext(make_request({"x-forwarded-for": "1.2.3.4, 10.0.0.1"}))
        assert context.client_ip == "1.2.3.4"

    def test_real_ip_header(self):
        context = ErrorContext(make_request({"x-real-ip": "5.6.7.8"}))
        assert context.client_ip == "5.6.7.8"

    def test_no_client(self):
        assert ErrorContext(make_request(client=None)).client_ip is None

class TestErrorTypes:
    """Test cases for the custom exceptions"""

    def test_database_error_message(self):
        error = DatabaseError("Order table was not created properly")
        assert str(error) == "Order table was not created properly"
        assert error.message == "Order table was not created properly"

    def test_validation_failed_keeps_errors(self):
        errors = [{"field": "totalValue", "message": "totalValue is required"}]
        assert ValidationFailed(errors).errors == errors
