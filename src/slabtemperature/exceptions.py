"""Exceptions raised by the slab solver."""


class SlabTemperatureError(Exception):
    """Base class for all errors raised by this package."""


class InvalidConfiguration(SlabTemperatureError, ValueError):
    """Raised when solver parameters violate their constraints."""


class DegenerateNormalization(SlabTemperatureError, ArithmeticError):
    """
    Raised by a normalized snapshot when both ambient temperatures are equal.

    The caller can recover by requesting raw (non-normalized) values instead.
    """
