from typing import Optional


class LinqyError(Exception):
    """base class for errors raised by linqy itself"""
    pass


class InvalidStateError(LinqyError, ValueError):
    """
    raised when an operation is not valid for the current state of an object:
    reading `current` outside a successful move_next, or a first/last/single
    style operation whose precondition does not hold.
    """

    def __init__(self, message: str = "operation is not valid due to the current state of the object"):
        super().__init__(message)


class ArgumentOutOfRangeError(LinqyError, IndexError):
    """raised when an argument is outside the range of valid values"""

    def __init__(self, parameter: Optional[str] = None, message: Optional[str] = None):
        self.parameter = parameter
        text = message or "specified argument was out of the range of valid values"
        if parameter:
            text = f"{text} (parameter: {parameter})"
        super().__init__(text)
