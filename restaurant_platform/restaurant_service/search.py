"""
Restaurant search: filter construction, store translation and pagination.

A search request is turned into a ``SearchFilter`` made of tagged
predicates (``CityMatch``, ``CuisineAllOf``, ``TextOrCuisine``) combined
with AND. The filter stays a plain value until ``compile_filter`` translates
it into a SQLAlchemy clause at the query boundary.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
import logging
import math
import re

from sqlalchemy import and_, func, or_, true
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from .models import Restaurant, RestaurantCuisine

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
# Largest page whose offset still binds as a signed 64-bit integer
MAX_PAGE = (2**63 - 1) // PAGE_SIZE
DEFAULT_SORT_OPTION = "lastUpdated"

# Public sort keys mapped onto columns; anything else leaves the order alone
SORTABLE_FIELDS = {
    "lastUpdated": Restaurant.last_updated,
    "restaurantName": Restaurant.restaurant_name,
    "deliveryPrice": Restaurant.delivery_price,
    "estimatedDeliveryTime": Restaurant.estimated_delivery_time,
    "city": Restaurant.city,
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class CityMatch:
    """City contains ``city``, ignoring case."""
    city: str


@dataclass(frozen=True)
class CuisineAllOf:
    """Restaurant lists every one of ``cuisines`` (exact label, ignoring case)."""
    cuisines: Tuple[str, ...]


@dataclass(frozen=True)
class TextOrCuisine:
    """Name contains ``text``, or one of the cuisine labels does."""
    text: str


Predicate = Union[CityMatch, CuisineAllOf, TextOrCuisine]


@dataclass(frozen=True)
class SearchFilter:
    predicates: Tuple[Predicate, ...] = ()

    def and_(self, predicate: Predicate) -> "SearchFilter":
        return SearchFilter(self.predicates + (predicate,))


@dataclass(frozen=True)
class PaginationSpec:
    page: int = 1
    page_size: int = PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    def pages_for(self, total: int) -> int:
        return math.ceil(total / self.page_size)


@dataclass(frozen=True)
class SearchParams:
    city: str
    search_query: str = ""
    selected_cuisines: Tuple[str, ...] = ()
    sort_option: str = DEFAULT_SORT_OPTION
    page: int = 1

    @classmethod
    def from_query(
        cls,
        city: str,
        search_query: Optional[str] = None,
        selected_cuisines: Optional[str] = None,
        sort_option: Optional[str] = None,
        page: Optional[str] = None,
    ) -> "SearchParams":
        """Normalize raw query-string values; missing or blank values fall back to defaults."""
        return cls(
            city=city,
            search_query=search_query or "",
            selected_cuisines=parse_cuisines(selected_cuisines),
            sort_option=sort_option or DEFAULT_SORT_OPTION,
            page=parse_page(page),
        )


@dataclass
class SearchResult:
    restaurants: List[Restaurant] = field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 1
    # Set when the city alone matched nothing and the search stopped early
    city_not_found: bool = False


def parse_page(raw: Optional[str]) -> int:
    """
    Parse the ``page`` query value.

    A leading integer is accepted ("3abc" -> 3). Missing, non-numeric and
    non-positive values all become 1. Values past MAX_PAGE are clamped to it,
    which is always an empty page.
    """
    if raw is None:
        return 1
    match = _LEADING_INT.match(str(raw))
    if not match:
        return 1
    digits = match.group(1)
    if digits.startswith("-"):
        return 1
    # Avoid int() on arbitrarily long digit strings
    significant = digits.lstrip("+0")
    if len(significant) > len(str(MAX_PAGE)):
        return MAX_PAGE
    page = int(significant or "0")
    if page < 1:
        return 1
    return min(page, MAX_PAGE)


def parse_cuisines(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(token.strip() for token in raw.split(",") if token.strip())


def city_filter(params: SearchParams) -> SearchFilter:
    return SearchFilter((CityMatch(params.city),))


def build_filter(params: SearchParams) -> SearchFilter:
    search_filter = city_filter(params)
    if params.selected_cuisines:
        search_filter = search_filter.and_(CuisineAllOf(params.selected_cuisines))
    if params.search_query:
        search_filter = search_filter.and_(TextOrCuisine(params.search_query))
    return search_filter


def compile_predicate(predicate: Predicate) -> ColumnElement:
    if isinstance(predicate, CityMatch):
        return Restaurant.city.icontains(predicate.city, autoescape=True)

    if isinstance(predicate, CuisineAllOf):
        return and_(*[
            Restaurant.cuisines.any(func.lower(RestaurantCuisine.name) == cuisine.lower())
            for cuisine in predicate.cuisines
        ])

    if isinstance(predicate, TextOrCuisine):
        return or_(
            Restaurant.restaurant_name.icontains(predicate.text, autoescape=True),
            Restaurant.cuisines.any(
                RestaurantCuisine.name.icontains(predicate.text, autoescape=True)
            ),
        )

    raise TypeError(f"Unsupported search predicate: {predicate!r}")


def compile_filter(search_filter: SearchFilter) -> ColumnElement:
    if not search_filter.predicates:
        return true()
    return and_(*[compile_predicate(p) for p in search_filter.predicates])


def sort_clauses(sort_option: str) -> list:
    column = SORTABLE_FIELDS.get(sort_option)
    if column is None:
        logger.debug(f"Unknown sort option ignored: {sort_option}")
        return [Restaurant.id.asc()]
    return [column.asc(), Restaurant.id.asc()]


def search_restaurants(db: Session, params: SearchParams) -> SearchResult:
    """
    Run a restaurant search.

    Args:
        db: Database session
        params: Normalized search parameters

    Returns:
        SearchResult with at most one page of restaurants. When no restaurant
        matches the city alone, ``city_not_found`` is set and the pagination
        is the fixed empty page (total 0, page 1, pages 1).
    """
    city_count = db.query(Restaurant).filter(compile_filter(city_filter(params))).count()
    if city_count == 0:
        logger.info(f"No restaurants for city={params.city!r}")
        return SearchResult(city_not_found=True)

    clause = compile_filter(build_filter(params))
    pagination = PaginationSpec(page=params.page)

    restaurants = (
        db.query(Restaurant)
        .filter(clause)
        .order_by(*sort_clauses(params.sort_option))
        .offset(pagination.skip)
        .limit(pagination.page_size)
        .all()
    )

    total = db.query(Restaurant).filter(clause).count()

    logger.info(
        f"Restaurant search: city={params.city!r}, query={params.search_query!r}, "
        f"cuisines={list(params.selected_cuisines)}, sort={params.sort_option}, "
        f"page={pagination.page}, total={total}, returned={len(restaurants)}"
    )

    return SearchResult(
        restaurants=restaurants,
        total=total,
        page=pagination.page,
        pages=pagination.pages_for(total),
    )
