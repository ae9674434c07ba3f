"""Tests for the exception hierarchy and result records."""

import pytest

from brokerage_admin.exceptions import (
    AlreadyExistsError,
    AuthorizationError,
    BrokerageError,
    ConfigurationError,
    EntityNotFoundError,
    ErrorKind,
    IdentityDirectoryError,
    QueryFailedError,
    SinkError,
    ValidationFailedError,
)
from brokerage_admin.results import EntityResult, ListResult, MutationResult


class TestExceptionHierarchy:
    """Tests for exception classes and their kinds."""

    @pytest.mark.parametrize(
        "exc_class, kind",
        [
            (EntityNotFoundError, ErrorKind.NOT_FOUND),
            (AlreadyExistsError, ErrorKind.ALREADY_EXISTS),
            (ValidationFailedError, ErrorKind.VALIDATION_FAILED),
            (QueryFailedError, ErrorKind.QUERY_FAILED),
            (IdentityDirectoryError, ErrorKind.IDENTITY_DIRECTORY_FAILED),
            (AuthorizationError, ErrorKind.UNAUTHORIZED),
            (ConfigurationError, ErrorKind.INTERNAL),
            (SinkError, ErrorKind.INTERNAL),
        ],
    )
    def test_kind(self, exc_class: type, kind: ErrorKind) -> None:
        """Test each error carries its kind and is a BrokerageError."""
        exc = exc_class("boom")

        assert isinstance(exc, BrokerageError)
        assert exc.kind == kind
        assert str(exc) == "boom"

    def test_catch_as_base(self) -> None:
        """Test subclasses can be caught as BrokerageError."""
        with pytest.raises(BrokerageError):
            raise EntityNotFoundError("StockAccount not found")


class TestMutationResult:
    """Tests for MutationResult."""

    def test_ok(self) -> None:
        result = MutationResult.ok("abc")

        assert result.success is True
        assert result.entity_id == "abc"
        assert result.error is None
        assert result.error_kind is None

    def test_failure(self) -> None:
        result = MutationResult.failure(EntityNotFoundError("CDS not found"))

        assert result.success is False
        assert result.entity_id is None
        assert result.error == "CDS not found"
        assert result.error_kind == ErrorKind.NOT_FOUND


class TestReadResults:
    """Tests for EntityResult and ListResult."""

    def test_entity_result_success(self) -> None:
        result = EntityResult(entity={"id": "1"})

        assert result.success is True
        assert result.entity == {"id": "1"}

    def test_entity_result_failure(self) -> None:
        result = EntityResult.failure(QueryFailedError("store offline"))

        assert result.success is False
        assert result.entity is None
        assert result.error_kind == ErrorKind.QUERY_FAILED

    def test_list_result_failure_is_empty(self) -> None:
        """Test a failed list degrades to an empty list plus the error."""
        result = ListResult.failure(QueryFailedError("store offline"))

        assert result.success is False
        assert result.items == []
        assert len(result) == 0
        assert result.error == "store offline"

    def test_list_result_len(self) -> None:
        assert len(ListResult(items=[1, 2, 3])) == 3
