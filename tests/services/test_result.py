"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from settlectl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="pay_job", data={"job_id": 1})
        assert result.error is None
        assert result.warnings == []
        assert result.meta is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure("deposit", "INVALID_AMOUNT", "bad", amount="x")
        assert result.ok is False
        assert result.op == "deposit"
        assert result.data == {}
        assert result.error == ServiceError(
            code="INVALID_AMOUNT", message="bad", detail={"amount": "x"}
        )

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="pay_job")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_serializes_to_json(self) -> None:
        result = ServiceResult.failure("pay_job", "JOB_NOT_FOUND", "Job not found.")
        payload = result.model_dump(mode="json")
        assert payload["error"]["code"] == "JOB_NOT_FOUND"
        assert payload["error"]["detail"] == {}
