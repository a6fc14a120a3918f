"""
utils/errors.py
---------------
Exceptions raised by the budget engine.
"""


class InvalidInputError(ValueError):
    """
    Raised when a value handed to the engine breaks its input contract,
    e.g. a malformed ISO date string or an unknown transaction type.

    Amounts are not checked here; callers validate them before they
    reach the engine.
    """

    def __init__(self, field: str, value, reason: str = "invalid value"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}: {reason} ({value!r})")
