"""
Endpoints for the signed-in user
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from ..auth import AuthContext, require_auth
from ..db import get_db
from ..errors import InternalError, NotFoundError, RestaurantServiceError
from ..models import User
from ..schemas import MessageResponse, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/my/user", tags=["my-user"])


@router.get(
    "",
    response_model=UserOut,
    responses={
        401: {"description": "Missing or invalid bearer token"},
        404: {"description": "User not found", "model": MessageResponse},
        500: {"description": "Internal server error", "model": MessageResponse}
    },
)
def get_current_user(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    """Return the profile of the user the bearer token resolves to."""
    try:
        user = db.query(User).filter(User.id == auth.user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    except RestaurantServiceError:
        raise

    except Exception as e:
        logger.error(f"Failed to load user {auth.user_id}: {str(e)}", exc_info=True)
        raise InternalError() from e
