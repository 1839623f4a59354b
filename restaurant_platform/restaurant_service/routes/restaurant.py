"""
Public restaurant endpoints: lookup by id and city search
"""
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional
import logging
import uuid

from ..db import get_db
from ..errors import InternalError, NotFoundError, RestaurantServiceError
from ..models import Restaurant
from ..schemas import MessageResponse, Pagination, RestaurantOut, RestaurantSearchResponse
from ..search import SearchParams, search_restaurants

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurant", tags=["restaurant"])


def _is_valid_restaurant_id(restaurant_id: str) -> bool:
    try:
        uuid.UUID(restaurant_id)
    except ValueError:
        return False
    return True


@router.get(
    "/search/{city}",
    response_model=RestaurantSearchResponse,
    responses={
        404: {
            "description": "No restaurants in the requested city",
            "model": RestaurantSearchResponse
        },
        500: {
            "description": "Internal server error",
            "model": MessageResponse
        }
    },
    summary="Search restaurants in a city",
)
def search_restaurant(
    city: str,
    search_query: Optional[str] = Query(None, alias="searchQuery", description="Match against name or cuisine"),
    selected_cuisines: Optional[str] = Query(None, alias="selectedCuisines", description="Comma separated; all must match"),
    sort_option: Optional[str] = Query(None, alias="sortOption", description="Ascending sort field, default lastUpdated"),
    page: Optional[str] = Query(None, description="1-based page number"),
    db: Session = Depends(get_db)
):
    try:
        params = SearchParams.from_query(
            city=city,
            search_query=search_query,
            selected_cuisines=selected_cuisines,
            sort_option=sort_option,
            page=page,
        )
        result = search_restaurants(db, params)

        response = RestaurantSearchResponse(
            data=[RestaurantOut.model_validate(r) for r in result.restaurants],
            pagination=Pagination(total=result.total, page=result.page, pages=result.pages),
        )

        if result.city_not_found:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=response.model_dump(mode="json", by_alias=True),
            )
        return response

    except RestaurantServiceError:
        raise

    except Exception as e:
        logger.error(f"Restaurant search failed for city={city!r}: {str(e)}", exc_info=True)
        raise InternalError() from e


@router.get(
    "/{restaurant_id}",
    response_model=RestaurantOut,
    responses={
        404: {"description": "Restaurant not found", "model": MessageResponse},
        500: {"description": "Internal server error", "model": MessageResponse}
    },
    summary="Get a restaurant by id",
)
def get_restaurant(restaurant_id: str, db: Session = Depends(get_db)):
    try:
        # Ids that cannot be a key are reported like missing ones
        if not _is_valid_restaurant_id(restaurant_id):
            raise NotFoundError("Restaurant not found")

        restaurant = db.query(Restaurant).filter(Restaurant.id == restaurant_id).first()
        if not restaurant:
            raise NotFoundError("Restaurant not found")

        return restaurant

    except RestaurantServiceError:
        raise

    except Exception as e:
        logger.error(f"Failed to load restaurant {restaurant_id}: {str(e)}", exc_info=True)
        raise InternalError() from e
