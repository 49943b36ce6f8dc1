"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from trackctl.domain.errors import InvalidTimestampError, NoOpenIntervalError
from trackctl.services.result import ServiceError, ServiceResult


class TestServiceError:
    def test_from_exception(self) -> None:
        error = ServiceError.from_exception(InvalidTimestampError(3, "noon"))
        assert error.code == "INVALID_TIMESTAMP"
        assert error.message == "invalid timestamp 'noon' on line 3"
        assert error.detail == {"line": 3, "value": "noon"}

    def test_from_exception_without_detail(self) -> None:
        error = ServiceError.from_exception(NoOpenIntervalError())
        assert error.code == "NO_OPEN_INTERVAL"
        assert error.detail == {}

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError(code="WHATEVER", message="x")  # type: ignore[arg-type]


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="begin", data={"start": "x"})
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None
        assert result.exit_code == 0

    def test_failure_exit_code(self) -> None:
        error = ServiceError(code="NO_OPEN_INTERVAL", message="no incomplete entry to end")
        result = ServiceResult(ok=False, op="end", error=error)
        assert result.exit_code == 1

    def test_unknown_op_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceResult(ok=True, op="create_note")  # type: ignore[arg-type]

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True, op="total", data={"total": "1h0m0s"}, meta={"strict": False}
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["total"] == "1h0m0s"
        assert parsed["meta"]["strict"] is False

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="status")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
