"""Pydantic schema for catalog records coming from an external data source.

Records are plain mappings (loaded from a fixture, a config file or an API
payload). They are validated here before any ``Product`` is built.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator


class ProductRecord(BaseModel):
    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"kind": "physical", "name": "Smartphone", "price": "999.99", "stock": 10, "weight_kg": 0.2},
                {
                    "kind": "digital",
                    "name": "Python Programming Guide",
                    "price": "29.99",
                    "stock": 100,
                    "download_link": "download.example.com/ebook",
                },
            ]
        },
    }

    kind: Literal["physical", "digital"]
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0)
    stock: int = Field(0, ge=0, strict=True)
    weight_kg: float | None = Field(None, ge=0)
    download_link: str | None = None

    @model_validator(mode="after")
    def kind_attributes_must_be_present(self) -> ProductRecord:
        if self.kind == "physical" and self.weight_kg is None:
            raise ValueError("Physical products require weight_kg")
        if self.kind == "digital" and not self.download_link:
            raise ValueError("Digital products require download_link")
        return self
