"""Base model for objects read from the management API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class ResourceModel(BaseModel):
    """Accepts camelCase resource keys or snake_case names.

    The API server serializes unset fields as null; those are dropped before
    validation so field defaults apply.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data
