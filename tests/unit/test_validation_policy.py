"""
Tests for Validation Policy
"""

from dataclasses import dataclass

import pytest

from proxytrace.container import read, remove, wrap, write
from proxytrace.errors import (
    SchemaViolationError,
    TypeMismatchError,
    UnknownPropertyError,
    WriteRejectedError,
)
from proxytrace.policies import ValidationPolicy


@dataclass
class Account:
    owner: str
    balance: float
    frozen: bool


class TestValidationPolicy:
    """Test suite for schema-validated containers."""

    @pytest.fixture
    def schema(self):
        """Default user values; their kinds are the schema."""
        return {"name": "", "age": 0, "is_active": False}

    @pytest.fixture
    def user(self, schema):
        return wrap(schema, ValidationPolicy())

    # =========================================================================
    # Accepted Writes
    # =========================================================================

    def test_valid_assignments(self, user, schema):
        """Test that matching kinds are accepted."""
        user.name = "Alice"
        user.age = 25
        user.is_active = True

        assert schema == {"name": "Alice", "age": 25, "is_active": True}

    @pytest.mark.parametrize("key,value", [
        ("name", "Bob"),
        ("name", ""),
        ("age", 0),
        ("age", 41.5),
        ("age", -3),
        ("is_active", True),
        ("is_active", False),
    ])
    def test_round_trip(self, user, key, value):
        """Test that a written value reads back unchanged."""
        assert write(user, key, value).accepted is True
        assert read(user, key) == value

    # =========================================================================
    # Type Mismatches
    # =========================================================================

    def test_string_into_number(self, user, schema):
        """Test that '25' cannot replace a number."""
        user.age = 30

        with pytest.raises(TypeMismatchError) as exc:
            user.age = "25"

        assert "must be of type number, got string" in str(exc.value)
        assert exc.value.expected == "number"
        assert exc.value.actual == "string"
        assert schema["age"] == 30

    def test_number_into_string(self, user):
        """Test that a number cannot replace a string."""
        with pytest.raises(TypeMismatchError):
            user.name = 123

    def test_boolean_is_not_widened_to_number(self, user, schema):
        """Test that 1 is rejected for a boolean field."""
        with pytest.raises(TypeMismatchError):
            user.is_active = 1

        assert schema["is_active"] is False

    def test_number_does_not_accept_boolean(self, user):
        """Test that True is rejected for a number field despite bool subclassing int."""
        with pytest.raises(TypeMismatchError):
            user.age = True

    def test_mismatch_is_a_type_error(self, user):
        """Test that mismatches can be caught as TypeError."""
        with pytest.raises(TypeError):
            user["age"] = None

    # =========================================================================
    # Unknown Keys
    # =========================================================================

    def test_unknown_write(self, user, schema):
        """Test that writing an unknown key is rejected without adding it."""
        with pytest.raises(UnknownPropertyError) as exc:
            user.invalid_prop = "test"

        assert "does not exist on the schema" in str(exc.value)
        assert exc.value.key == "invalid_prop"
        assert "invalid_prop" not in schema

    def test_unknown_read(self, user):
        """Test that reading an unknown key is rejected."""
        with pytest.raises(UnknownPropertyError):
            user.invalid_prop

        with pytest.raises(UnknownPropertyError):
            user["invalid_prop"]

    def test_unknown_read_after_failed_write(self, user):
        """Test that a failed write does not make the key readable."""
        with pytest.raises(UnknownPropertyError):
            user.invalid_prop = "x"

        with pytest.raises(UnknownPropertyError):
            read(user, "invalid_prop")

    def test_unknown_key_error_hierarchy(self, user):
        """Test that unknown keys look like lookup and attribute errors."""
        assert not hasattr(user, "invalid_prop")

        with pytest.raises(LookupError):
            user["invalid_prop"]

        with pytest.raises(SchemaViolationError):
            user["invalid_prop"]

    # =========================================================================
    # Deletes and Objects
    # =========================================================================

    def test_delete_is_rejected(self, user, schema):
        """Test that schema keys cannot be removed."""
        with pytest.raises(WriteRejectedError):
            del user.age

        result = remove(user, "age")
        assert result.accepted is False
        assert "cannot be removed" in result.reason
        assert "age" in schema

    def test_delete_unknown_key(self, user):
        """Test that deleting an unknown key is an unknown-property error."""
        with pytest.raises(UnknownPropertyError):
            del user.nothing

    def test_object_target(self):
        """Test validation against attributes of a plain object."""
        account = Account(owner="ann", balance=10.0, frozen=False)
        proxy = wrap(account, ValidationPolicy())

        proxy.balance = 12.5
        with pytest.raises(TypeMismatchError):
            proxy.frozen = "yes"
        with pytest.raises(UnknownPropertyError):
            proxy.overdraft = 5

        assert account.balance == 12.5
        assert account.frozen is False
        assert not hasattr(account, "overdraft")

    def test_sequence_target_with_string_indexes(self):
        """Test that digit-string keys address list slots the schema knows."""
        row = ["ann", 30, True]
        proxy = wrap(row, ValidationPolicy())

        assert proxy["0"] == "ann"
        assert read(proxy, "-1") is True

        proxy["1"] = 31
        with pytest.raises(TypeMismatchError):
            proxy["2"] = "yes"
        with pytest.raises(UnknownPropertyError):
            proxy["3"] = 0

        assert row == ["ann", 31, True]
