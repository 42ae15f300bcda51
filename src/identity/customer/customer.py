"""Customer value object."""

from pydantic import BaseModel, Field


class Customer(BaseModel):
    """The person an order is placed for.

    Customers carry no lifecycle of their own inside the order pipeline;
    two customers with the same names are equal.
    """

    model_config = {"frozen": True}

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return self.display_name
