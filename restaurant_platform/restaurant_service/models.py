from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Index
from datetime import datetime, timezone
from .db import Base
from sqlalchemy.orm import relationship
import uuid


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Columns hold naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=_new_id)
    # Subject claim issued by the identity provider
    auth0_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=False)
    name = Column(String)
    address_line1 = Column(String)
    city = Column(String)
    country = Column(String)

    restaurants = relationship("Restaurant", back_populates="owner")


class Restaurant(Base):
    __tablename__ = "restaurants"
    id = Column(String, primary_key=True, default=_new_id)
    user_id = Column(String, ForeignKey("users.id"), nullable=True)
    restaurant_name = Column(String, nullable=False)
    city = Column(String, nullable=False)
    country = Column(String, nullable=False, default="")
    # minor currency units
    delivery_price = Column(Integer, nullable=False, default=0)
    estimated_delivery_time = Column(Integer, nullable=False, default=0)
    image_url = Column(String, nullable=True)
    last_updated = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="restaurants")
    cuisines = relationship(
        "RestaurantCuisine",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="RestaurantCuisine.position",
    )
    menu_items = relationship(
        "MenuItem",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_restaurants_city", "city"),
        Index("ix_restaurants_last_updated", "last_updated"),
    )

    @property
    def cuisine_names(self) -> list[str]:
        return [c.name for c in self.cuisines]

    def __repr__(self):
        return f"<Restaurant(id={self.id}, restaurant_name={self.restaurant_name}, city={self.city})>"


class RestaurantCuisine(Base):
    __tablename__ = "restaurant_cuisines"
    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(String, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    restaurant = relationship("Restaurant", back_populates="cuisines")


class MenuItem(Base):
    __tablename__ = "menu_items"
    id = Column(String, primary_key=True, default=_new_id)
    restaurant_id = Column(String, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    price = Column(Integer, nullable=False)

    restaurant = relationship("Restaurant", back_populates="menu_items")
