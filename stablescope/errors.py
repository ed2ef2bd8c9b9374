"""Exceptions shared across the aggregator, providers and callers."""


class InvalidInputError(ValueError):
    """Caller supplied input that cannot be processed (e.g. an empty address).

    The message is meant to be shown to the user as-is.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProviderError(Exception):
    """A single balance request against one network failed."""

    def __init__(self, chain: str, reason: str) -> None:
        super().__init__(f"{chain}: {reason}")
        self.chain = chain
        self.reason = reason
