"""Schemas shared by several endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

ItemT = TypeVar("ItemT")


class PageRead(BaseModel, Generic[ItemT]):
    """One page of a paginated listing."""

    items: list[ItemT]
    total: int
    page: int
    page_size: int
    total_pages: int

    model_config = ConfigDict(from_attributes=True)


class ValueCountRead(BaseModel):
    value: str
    count: int

    model_config = ConfigDict(from_attributes=True)


__all__ = ["PageRead", "ValueCountRead"]
