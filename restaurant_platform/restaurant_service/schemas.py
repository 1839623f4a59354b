"""
Pydantic schemas for the restaurant service API responses
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MenuItemOut(CamelModel):
    id: str
    name: str
    price: int


class RestaurantOut(CamelModel):
    id: str
    user_id: Optional[str] = None
    restaurant_name: str
    city: str
    country: str
    delivery_price: int
    estimated_delivery_time: int
    cuisines: List[str] = Field(default_factory=list)
    menu_items: List[MenuItemOut] = Field(default_factory=list)
    image_url: Optional[str] = None
    last_updated: datetime

    @field_validator("cuisines", mode="before")
    @classmethod
    def cuisine_labels(cls, v: Any) -> List[str]:
        """ORM rows carry RestaurantCuisine objects; expose only their labels"""
        return [getattr(c, "name", c) for c in v or []]


class Pagination(BaseModel):
    total: int
    page: int
    pages: int


class RestaurantSearchResponse(BaseModel):
    data: List[RestaurantOut]
    pagination: Pagination


class UserOut(CamelModel):
    id: str
    auth0_id: str
    email: str
    name: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
