"""Error kinds raised by the markup pipeline."""


class MarkupError(Exception):
    """Base class for every pipeline failure."""


class ParseError(MarkupError, ValueError):
    """A price, rate or category could not be parsed."""


class MissingStateError(MarkupError):
    """The invocation is missing its job or its rate table."""

    def __init__(self, missing: str):
        self.missing = missing
        super().__init__(f"Cannot find {missing} in invocation")


class InvalidQuantityError(MarkupError, ValueError):
    """Headcount is negative."""

    def __init__(self, headcount: int):
        self.headcount = headcount
        super().__init__(f"Number of people has to be positive, got {headcount}")
