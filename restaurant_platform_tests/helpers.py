"""
Shared builders for restaurant service tests
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa

from restaurant_platform.restaurant_service.auth import TokenVerifier
from restaurant_platform.restaurant_service.config import settings
from restaurant_platform.restaurant_service.models import Restaurant, RestaurantCuisine, User

SIGNING_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
OTHER_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)


class StaticJWKSClient:
    """Serves one public key the way PyJWKClient does after a JWKS fetch."""

    def __init__(self, public_key):
        self.public_key = public_key

    def get_signing_key_from_jwt(self, token):
        # Raises DecodeError on garbage, like the real client
        jwt.get_unverified_header(token)
        return SimpleNamespace(key=self.public_key)


def static_verifier() -> TokenVerifier:
    return TokenVerifier(
        audience=settings.AUTH0_AUDIENCE,
        issuer=settings.auth0_issuer,
        jwks_client=StaticJWKSClient(SIGNING_KEY.public_key()),
    )


def make_token(sub="auth0|user-1", audience=None, issuer=None, key=None, expires_in=timedelta(minutes=5)):
    now = datetime.now(timezone.utc)
    payload = {
        "aud": audience or settings.AUTH0_AUDIENCE,
        "iss": issuer or settings.auth0_issuer,
        "iat": now,
        "exp": now + expires_in,
    }
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, key or SIGNING_KEY, algorithm="RS256")


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def add_restaurant(db, restaurant_name, city, cuisines=(), last_updated=None, **fields):
    restaurant = Restaurant(
        restaurant_name=restaurant_name,
        city=city,
        country=fields.pop("country", "Spain"),
        delivery_price=fields.pop("delivery_price", 250),
        estimated_delivery_time=fields.pop("estimated_delivery_time", 30),
        last_updated=last_updated or datetime(2024, 1, 1),
        cuisines=[RestaurantCuisine(name=c, position=i) for i, c in enumerate(cuisines)],
        **fields,
    )
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def add_user(db, auth0_id="auth0|user-1", email="diner@example.com", **fields):
    user = User(auth0_id=auth0_id, email=email, **fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
