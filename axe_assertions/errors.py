class AxeAssertionError(Exception):
    """Base class for errors raised by axe-assertions."""


class InvalidInputError(AxeAssertionError, ValueError):
    """The value passed for mounting is neither an element nor an HTML string."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class EngineError(AxeAssertionError, RuntimeError):
    """axe-core could not be loaded or reported a failure while running."""


class MissingViolationsFieldError(AxeAssertionError, KeyError):
    """A results object without a ``violations`` field reached the matchers."""

    def __init__(self, message: str = "No violations found in aXe results object"):
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])
