"""
Error types raised by the ClientBook model and storage layers.

Route handlers translate these into HTTP status codes (see api/main.py).
"""


class ClientBookError(Exception):
    """Base class for all ClientBook errors."""


class DuplicateEntryError(ClientBookError):
    """An operation would break a uniqueness rule."""


class DuplicatePersonError(DuplicateEntryError):
    def __init__(self, name: str = ""):
        self.name = name
        super().__init__(f"This person already exists in the address book: {name}" if name
                         else "This person already exists in the address book")


class DuplicatePolicyError(DuplicateEntryError):
    def __init__(self, policy_id: str):
        self.policy_id = policy_id
        super().__init__(f"Policy {policy_id} already exists for this client")


class NotFoundError(ClientBookError):
    """A required target is absent."""


class PersonNotFoundError(NotFoundError):
    def __init__(self, name: str = ""):
        self.name = name
        super().__init__(f"Person not found: {name}" if name else "Person not found")


class PolicyNotFoundError(NotFoundError):
    def __init__(self, policy_id: str):
        self.policy_id = policy_id
        super().__init__(f"Policy {policy_id} not found for this client")


class InvalidArgumentError(ClientBookError, ValueError):
    """A required argument is missing or malformed."""


class DataLoadingError(ClientBookError):
    """Stored data could not be read or parsed."""


def require_non_null(*values, names: tuple[str, ...] = ()) -> None:
    """Raise InvalidArgumentError if any of the values is None."""
    for i, value in enumerate(values):
        if value is None:
            label = names[i] if i < len(names) else f"argument {i}"
            raise InvalidArgumentError(f"{label} must not be None")
