"""Error taxonomy for astrofluxes.

Malformed calls (a missing mandatory argument, a value of the wrong type,
asking a flux for a type it never stored) raise one of the classes below.
Well-formed queries that simply have no answer return ``None`` instead.

Each class also derives from the builtin exception a caller would
naturally catch, so ``except ValueError`` keeps working for code that
does not know about this package.
"""


class FluxError(Exception):
    """Base class for all astrofluxes errors."""


class MissingArgumentError(FluxError, ValueError):
    """Raised when a mandatory argument is ``None``."""

    def __init__(self, argument, operation):
        self.argument = argument
        self.operation = operation
        super().__init__(f"{operation}: '{argument}' argument must be provided")


class TypeMismatchError(FluxError, TypeError):
    """Raised when an argument is not of the required type."""

    def __init__(self, argument, expected, received, operation):
        self.argument = argument
        self.expected = expected
        self.operation = operation
        super().__init__(
            f"{operation}: '{argument}' must be {expected}, "
            f"got {type(received).__name__}"
        )


class UnknownTypeError(FluxError, KeyError):
    """Raised when a flux is queried for a type label it does not hold.

    No conversion is done between flux types, so a flux stored as
    ``"mag"`` cannot be read back as ``"jy"``.
    """

    def __init__(self, flux_type, available):
        self.flux_type = flux_type
        self.available = tuple(available)
        super().__init__(
            f"Cannot translate between flux types: '{flux_type}' not in "
            f"{list(self.available)}"
        )

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]
