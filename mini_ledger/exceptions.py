"""Custom exception hierarchy for mini-ledger."""


class LedgerError(Exception):
    """Base exception for all mini-ledger errors."""


class ValidationError(LedgerError, ValueError):
    """Raised when an argument fails validation."""


class InvalidAmountError(ValidationError):
    """Raised when an amount is not a usable number."""


class MissingFieldError(ValidationError):
    """Raised when a required transaction field is absent or empty."""


class InvalidTransactionTypeError(ValidationError):
    """Raised when a transaction type is not one of the known kinds."""


class InvalidMetadataError(ValidationError):
    """Raised when transaction metadata holds a value that cannot be frozen."""


class InvalidTimestampError(ValidationError):
    """Raised when a creation timestamp is not a datetime."""


class InvalidStartValueError(ValidationError):
    """Raised when an id generator start value is not a non-negative integer."""


class InvalidOverdraftLimitError(ValidationError):
    """Raised when an overdraft limit is negative, infinite or not a number."""


class MissingIdGeneratorError(ValidationError):
    """Raised when an account is built without an id generator."""


class CurrencyMismatchError(ValidationError):
    """Raised when a currency does not match the account currency."""


class AbstractInstantiationError(LedgerError, TypeError):
    """Raised when the abstract account base is constructed directly."""


class InvalidEntityStateError(LedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class AccountClosedError(InvalidEntityStateError):
    """Raised when a closed account is asked to change."""


class FundsError(LedgerError):
    """Raised when a withdrawal would break the account floor."""


class InsufficientFundsError(FundsError):
    """Raised when a standard account would go below zero."""


class OverdraftExceededError(FundsError):
    """Raised when a current account would go below its overdraft limit."""


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class DuplicateEntityError(LedgerError):
    """Raised when an entity with the same id is already registered."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""
