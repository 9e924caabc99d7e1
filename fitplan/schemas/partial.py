"""Base for PATCH/PUT bodies where omitted fields are left unchanged."""

from typing import ClassVar

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    # Columns that are NOT NULL: they may be omitted but not sent as null
    not_null_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = [f for f in self.not_null_fields if f in self.model_fields_set and getattr(self, f) is None]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self
