"""Category schemas."""

from pydantic import BaseModel, ConfigDict


class CategoryStyle(BaseModel):
    """Visual style of a category."""

    icon: str
    color: str


class CategoryResponse(BaseModel):
    """Category registry entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str
    color: str
