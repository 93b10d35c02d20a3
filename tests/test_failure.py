"""
Tests for failure classification.

Every failure leaving the package is classified: known errors carry a kind
and a displayable message.
"""

import pytest

from dexkeeper.models.failure import (
    ContractViolationError,
    FailureDetail,
    FailureKind,
    KnownError,
    MalformedRecordError,
)


class TestKnownError:
    def test_to_detail(self) -> None:
        """KnownError converts to a displayable FailureDetail."""
        error = KnownError(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="The catalog service could not be reached",
            detail="GET https://pokeapi.co/api/v2/pokemon: timeout",
            suggestion="Try again later.",
        )

        detail = error.to_detail()

        assert isinstance(detail, FailureDetail)
        assert detail.kind == FailureKind.EXTERNAL_API_ERROR
        assert detail.suggestion == "Try again later."
        assert str(error) == "The catalog service could not be reached"

    def test_detail_serializes_kind_as_string(self) -> None:
        detail = KnownError(FailureKind.NOT_FOUND, "No such entity").to_detail()

        assert detail.model_dump(mode="json")["kind"] == "not_found"


class TestMalformedRecordError:
    def test_carries_key(self) -> None:
        error = MalformedRecordError("pokemon_25", detail="Expecting value")

        assert error.key == "pokemon_25"
        assert error.kind == FailureKind.MALFORMED_RECORD
        assert "pokemon_25" in error.message


class TestContractViolationError:
    def test_is_value_error(self) -> None:
        """Callers may catch contract violations as plain ValueError."""
        with pytest.raises(ValueError):
            raise ContractViolationError("Unknown context 'switch'")

    def test_kind_is_invalid_input(self) -> None:
        error = ContractViolationError("Unknown field", detail="expected owned or is_variant")

        assert isinstance(error, KnownError)
        assert error.kind == FailureKind.INVALID_INPUT
        assert error.detail == "expected owned or is_variant"


class TestFailureKind:
    def test_kinds(self) -> None:
        assert {kind.value for kind in FailureKind} == {
            "invalid_input",
            "malformed_record",
            "not_found",
            "external_api_error",
        }
