"""
restaurant_service package

Backend for the restaurant discovery API:

- FastAPI application (`main.py`)
- SQLAlchemy models and database integration (`models.py`, `db.py`)
- Token verification and identity resolution (`auth.py`)
- Search filter construction and pagination (`search.py`)
- Pydantic schemas (`schemas.py`)
"""
