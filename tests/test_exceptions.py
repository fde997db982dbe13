"""Tests for custom exception hierarchy."""

from loan_chronology.exceptions import (
    ChronologyError,
    ConfigurationError,
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
    SinkError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_chronology_error_is_exception(self) -> None:
        assert isinstance(ChronologyError("test"), Exception)

    def test_entity_not_found_is_chronology_error(self) -> None:
        assert isinstance(EntityNotFoundError("test"), ChronologyError)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, ChronologyError)

    def test_other_errors_are_chronology_errors(self) -> None:
        for exc_class in (InvalidEntityStateError, ConfigurationError, SinkError):
            assert isinstance(exc_class("test"), ChronologyError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("Loan loan-001 not found")
        assert str(err) == "Loan loan-001 not found"
