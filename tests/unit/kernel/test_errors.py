"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import pytest

from tabex.kernel.errors import (
    BaseError,
    InputError,
    OverloadError,
    ProcessingError,
    ProcessingTimeoutError,
    ResourceLimitError,
    UnsupportedTypeError,
)


class TestBaseError:
    def test_default_code(self) -> None:
        assert BaseError("boom").code == "base_error"

    def test_explicit_code_wins(self) -> None:
        assert BaseError("boom", code="custom").code == "custom"

    def test_str_is_message(self) -> None:
        assert str(BaseError("boom", detail={"k": 1})) == "boom"

    def test_repr_names_code(self) -> None:
        assert repr(BaseError("boom")) == "BaseError(code='base_error', message='boom')"

    def test_detail_is_server_side_context(self) -> None:
        err = BaseError("boom", detail={"k": 1})
        assert err.detail == {"k": 1}
        assert err.details() == []


class TestTaxonomy:
    @pytest.mark.parametrize(
        "exc_type, code",
        [
            (InputError, "invalid_input"),
            (UnsupportedTypeError, "unsupported_type"),
            (ResourceLimitError, "resource_limit_exceeded"),
            (OverloadError, "overloaded"),
            (ProcessingTimeoutError, "timeout"),
            (ProcessingError, "processing_error"),
        ],
    )
    def test_codes(self, exc_type: type[BaseError], code: str) -> None:
        assert exc_type("x").code == code

    def test_all_derive_from_base(self) -> None:
        for exc_type in (InputError, ResourceLimitError, OverloadError, ProcessingTimeoutError, ProcessingError):
            assert issubclass(exc_type, BaseError)

    def test_unsupported_type_is_input_error(self) -> None:
        assert issubclass(UnsupportedTypeError, InputError)

    def test_input_error_carries_field_errors(self) -> None:
        err = InputError("Validation failed", errors=[{"field": "config.width", "message": "too small"}])
        assert err.details() == [{"field": "config.width", "message": "too small"}]

    def test_input_error_defaults_to_empty_errors(self) -> None:
        assert InputError("bad").errors == []

    def test_resource_limit_defaults(self) -> None:
        err = ResourceLimitError(limit=10, actual=11)
        assert err.message == "File too large"
        assert (err.limit, err.actual) == (10, 11)

    def test_overload_defaults(self) -> None:
        err = OverloadError(retry_after_seconds=5)
        assert err.message == "Server busy. Please try again later."
        assert err.retry_after_seconds == 5

    def test_processing_error_stage(self) -> None:
        assert ProcessingError("bad bytes", stage="parse").stage == "parse"
