# arqap/domains/loc/__init__.py

"""
The 'loc' domain package.

Manages where artefacts can be stored: shelves (including work tables) and
the fixed grid of physical locations (level 1-4 x column A-D) on each shelf.

Submodules:
- `models.py`: SQLModel tables for shelves and physical locations.
- `schemas.py`: request and response models.
- `crud.py`: async CRUD logic, including cell generation for new shelves.
- `routers.py`: FastAPI endpoints.
"""

__title__ = "ARQAP Location Domain"
__description__ = "Manages shelves and physical storage locations."
__version__ = "0.1.0"
__all__ = []
