"""
Restaurant discovery API
"""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from .auth import validate_auth_settings
from .config import settings
from .db import init_db
from .errors import RestaurantServiceError, UnauthorizedError
from .routes import health, my_user, restaurant

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Check identity provider settings and initialize database on startup"""
    validate_auth_settings()
    init_db()
    yield


app = FastAPI(
    title="Restaurant API",
    description="Restaurant lookup and city search",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(_request: Request, _exc: UnauthorizedError):
    # Auth failures carry no body
    return Response(status_code=401)


@app.exception_handler(RestaurantServiceError)
async def service_error_handler(_request: Request, exc: RestaurantServiceError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


app.include_router(restaurant.router)
app.include_router(my_user.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {
        "service": "Restaurant API",
        "version": "1.0.0",
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "restaurant_platform.restaurant_service.main:app",
        host="0.0.0.0",
        port=8000,
    )
