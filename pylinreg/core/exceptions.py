"""
Exception hierarchy for pylinreg.

All exceptions inherit from PyLinRegError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

The numeric core (accumulators, solvers, LDL) does not raise under
normal operation. These exceptions guard the boundaries: array entry
points, file readers and the command line.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinRegError(Exception):
    """Base exception for all pylinreg errors."""
    pass


class ValidationError(PyLinRegError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, or when a
    solver receives a feature vector whose length differs from the one
    it was initialized with.

    Attributes:
        expected: Expected length/dimension, if known
        actual: Length/dimension actually received, if known
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class FormatError(ValidationError):
    """
    Text input could not be parsed.

    Raised by the features file reader when a line is malformed.

    Attributes:
        line_number: 1-based line number of the offending line, if known
        line: The offending line, if available
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        line: str | None = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class ModelFormatError(FormatError):
    """A linear model dump is malformed (bad count, missing coefficients)."""
    pass
