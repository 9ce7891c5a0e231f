# arqap/domains/mov/__init__.py

"""
The 'mov' domain package: internal movements and loans of artefacts.

This is where an artefact's current location and availability are kept
consistent with its movement and loan history.

Submodules:
- `models.py`: internal_movements and loans tables.
- `schemas.py`: request and response models.
- `crud.py`: the movement and loan lifecycle (one transaction per operation).
- `routers.py`: FastAPI endpoints.
- `tasks.py`: arq job that repairs active-movement and location drift.
"""

__title__ = "ARQAP Movement Domain"
__description__ = "Tracks internal movements and loans and the resulting artefact location and availability."
__version__ = "0.1.0"
__all__ = []
