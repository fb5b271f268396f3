"""Tests for store error types."""

from initiative.errors import (
    ConfigurationError,
    ConstraintError,
    InitiativeError,
    MigrationError,
    SchemaDeclarationError,
    StorageError,
)


class TestErrorHierarchy:
    """Test error class hierarchy."""

    def test_all_errors_inherit_from_initiative_error(self) -> None:
        """All custom errors should inherit from InitiativeError."""
        assert issubclass(ConfigurationError, InitiativeError)
        assert issubclass(SchemaDeclarationError, InitiativeError)
        assert issubclass(StorageError, InitiativeError)
        assert issubclass(MigrationError, InitiativeError)

    def test_constraint_error_is_storage_error(self) -> None:
        """Constraint violations are a kind of storage error."""
        assert issubclass(ConstraintError, StorageError)

    def test_initiative_error_inherits_from_exception(self) -> None:
        assert issubclass(InitiativeError, Exception)


class TestMigrationError:
    """Test MigrationError specifics."""

    def test_migration_error_stores_version(self) -> None:
        error = MigrationError("Step failed", version=5)
        assert error.version == 5
        assert str(error) == "Step failed"


class TestConstraintError:
    """Test ConstraintError specifics."""

    def test_constraint_error_stores_table(self) -> None:
        error = ConstraintError("Duplicate name", "things")
        assert error.table == "things"
        assert str(error) == "Duplicate name"
