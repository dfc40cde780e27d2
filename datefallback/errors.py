"""Exception types raised by the date fallback runtime."""


class DateFallbackError(Exception):
    """Base class for all date fallback errors."""


class RegistryError(DateFallbackError, ValueError):
    """
    Provider registry violates its construction contract.

    Raised for duplicate provider names or a registry without a guaranteed
    fallback provider. This is the only error the package treats as fatal.
    """


class InvalidInstantError(DateFallbackError, ValueError):
    """Value cannot be interpreted as a point in time."""
