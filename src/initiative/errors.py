"""Initiative store error types.

All custom exceptions inherit from InitiativeError to allow
catching any store-specific error.
"""


class InitiativeError(Exception):
    """Base exception for all store errors."""

    pass


class ConfigurationError(InitiativeError):
    """Invalid configuration."""

    pass


class SchemaDeclarationError(InitiativeError):
    """Schema registry declaration is malformed."""

    pass


class StorageError(InitiativeError):
    """Database or storage operation failed."""

    pass


class ConstraintError(StorageError):
    """A unique or primary key constraint was violated."""

    def __init__(self, message: str, table: str) -> None:
        super().__init__(message)
        self.table = table


class MigrationError(InitiativeError):
    """Applying a schema version failed; the store cannot be opened."""

    def __init__(self, message: str, version: int) -> None:
        super().__init__(message)
        self.version = version
