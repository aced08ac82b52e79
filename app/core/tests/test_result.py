"""
Tests for the service result wrapper and error codes.

Related files:
    - core/services.py: ServiceResult, ErrorCode, BaseService
"""

import logging

import pytest

from core.services import ERROR_STATUS, BaseService, ErrorCode, ServiceResult


class TestServiceResult:
    def test_success(self):
        result = ServiceResult.success({"id": 1})

        assert result.success is True
        assert bool(result) is True
        assert result.data == {"id": 1}
        assert result.error is None
        assert result.http_status == 200

    def test_failure(self):
        result = ServiceResult.failure("Message not found", error_code=ErrorCode.NOT_FOUND)

        assert result.success is False
        assert bool(result) is False
        assert result.data is None
        assert result.to_response() == {
            "error": "Message not found",
            "error_code": ErrorCode.NOT_FOUND,
        }

    def test_failure_with_field_errors(self):
        result = ServiceResult.failure(
            "Invalid input",
            error_code=ErrorCode.INVALID_ARGUMENT,
            errors={"name": ["This field is required."]},
        )

        assert result.to_response()["errors"] == {"name": ["This field is required."]}

    def test_from_failure_copies_error(self):
        original = ServiceResult.failure("nope", error_code=ErrorCode.FORBIDDEN)

        copied = ServiceResult.from_failure(original)

        assert copied is not original
        assert (copied.success, copied.error, copied.error_code) == (
            False,
            "nope",
            ErrorCode.FORBIDDEN,
        )


class TestErrorStatus:
    """
    Error codes map to stable HTTP statuses.

    Why it matters: Clients branch on the status before reading the body.
    """

    @pytest.mark.parametrize(
        "error_code,expected",
        [
            (ErrorCode.UNAUTHORIZED, 401),
            (ErrorCode.PROFILE_NOT_FOUND, 404),
            (ErrorCode.NOT_FOUND, 404),
            (ErrorCode.FORBIDDEN, 403),
            (ErrorCode.INVALID_ARGUMENT, 400),
            (ErrorCode.UNAVAILABLE, 503),
        ],
    )
    def test_status_for_code(self, error_code, expected):
        assert ServiceResult.failure("x", error_code=error_code).http_status == expected

    def test_unknown_code_falls_back_to_400(self):
        assert ServiceResult.failure("x", error_code="SOMETHING_ELSE").http_status == 400

    def test_every_code_has_a_status(self):
        codes = {value for name, value in vars(ErrorCode).items() if name.isupper()}

        assert codes == set(ERROR_STATUS)


class SampleService(BaseService):
    pass


class TestBaseService:
    def test_logger_named_after_service(self):
        assert SampleService.get_logger().name == f"{__name__}.SampleService"

    def test_handle_exception_logs_and_fails(self, caplog):
        with caplog.at_level(logging.ERROR):
            result = SampleService.handle_exception(
                RuntimeError("boom"),
                context="Storing presence",
                error_code=ErrorCode.UNAVAILABLE,
            )

        assert result.success is False
        assert result.error == "Storing presence: boom"
        assert result.error_code == ErrorCode.UNAVAILABLE
        assert "Storing presence: boom" in caplog.text

    def test_handle_exception_defaults_code_to_exception_name(self):
        result = SampleService.handle_exception(ValueError("bad"))

        assert result.error_code == "VALUEERROR"
