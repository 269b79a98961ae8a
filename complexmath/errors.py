class ComplexError(ValueError):
    """Base class for errors raised by complex-number construction and access."""


class InvalidNumber(ComplexError):
    pass


class UnsupportedCoordinateSystem(ComplexError):
    pass


class UndefinedAngle(ComplexError):
    pass
