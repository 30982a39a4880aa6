# Ethan Doughty
# errors.py
"""Exceptions raised by the expression frontend."""


class InvalidArgument(ValueError):
    """Raised when split() or tokenize() receives unusable input.

    Only precondition violations end up here. Malformed lexemes never raise,
    they are classified as UnknownToken instead.
    """

    def __init__(self, message: str, argument: str):
        super().__init__(f"{argument}: {message}")
        self.argument = argument
