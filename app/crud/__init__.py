"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. Every function takes the SQLAlchemy
session as its first argument.
"""

from app.crud import company, job

__all__ = ["company", "job"]
