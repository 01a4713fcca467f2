"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for scenario run tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


@dataclass(frozen=True)
class CorrelationId:
    """
    Server-assigned order identifier (OGWOrderID).

    Scopes every request and status query after the first step to the same
    logical transaction. Surrounding whitespace is dropped on creation.
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError(
                f"Correlation id must be a string, got {type(self.value).__name__}"
            )
        cleaned = self.value.strip()
        if not cleaned:
            raise ValueError("Correlation id cannot be empty")
        object.__setattr__(self, 'value', cleaned)

    def __str__(self) -> str:
        return self.value
