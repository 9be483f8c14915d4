"""Exceptions raised by the matching engine."""

from __future__ import annotations


class InvalidParameterError(ValueError):
    """A caller-supplied control parameter is out of contract.

    Raised for pagination bounds and weight maps. Missing or malformed
    business data never raises; it resolves to a neutral default instead.
    """

    def __init__(self, parameter: str, message: str) -> None:
        self.parameter = parameter
        super().__init__(f"Invalid {parameter}: {message}")
