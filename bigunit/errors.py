from typing import Any, Optional


class BigUnitError(Exception):
    """Base class for every error raised by bigunit."""

    def __init__(self, message: str, cause: Optional[str] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.data = data

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} ({self.cause})"
        return self.message


class InvalidPrecision(BigUnitError, ValueError):
    def __init__(self, precision: Any):
        super().__init__(
            f"Invalid precision: {precision!r}",
            cause="precision must be a non-negative whole number",
            data=precision,
        )


class MissingPrecision(BigUnitError, ValueError):
    def __init__(self, value: Any = None):
        super().__init__(
            "Missing precision",
            cause=f"{type(value).__name__} values carry no precision of their own",
            data=value,
        )


class InvalidValueType(BigUnitError, TypeError):
    def __init__(self, value: Any, reason: Optional[str] = None):
        super().__init__(f"Invalid value type: {type(value).__name__}", cause=reason, data=value)


class InvalidDecimalString(BigUnitError, ValueError):
    def __init__(self, text: str):
        super().__init__(f"Invalid decimal string: {text!r}", data=text)


class DivisionByZero(BigUnitError, ZeroDivisionError):
    def __init__(self, operation: str = "div"):
        super().__init__("Division by zero", cause=operation)


class InvalidFraction(BigUnitError, ValueError):
    """Raised when a fraction's numerator or denominator is not a finite number."""

    def __init__(self, numerator: Any, denominator: Any):
        super().__init__(
            "Numerator and denominator must be finite numbers",
            cause=f"{numerator!r}/{denominator!r}",
            data=(numerator, denominator),
        )
