"""Client-generated order identifier value object."""
from dataclasses import dataclass

from ogw_sdk.utils import generate_numeric_id


@dataclass(frozen=True)
class OrderId:
    """
    Client-generated numeric order identifier.

    Format: 9 digits, no leading zero
    Examples:
    - 482910375
    - 100000001
    """
    value: str

    LENGTH = 9

    def __post_init__(self):
        if not self.value:
            raise ValueError("Order id cannot be empty")

        if not self.value.isdigit():
            raise ValueError(f"Order id must be numeric: {self.value}")

        if self.value[0] == "0":
            raise ValueError(f"Order id must not start with 0: {self.value}")

    @classmethod
    def generate(cls) -> "OrderId":
        """Generate a fresh random 9-digit order id."""
        return cls(value=generate_numeric_id(cls.LENGTH))

    def __str__(self) -> str:
        return self.value
