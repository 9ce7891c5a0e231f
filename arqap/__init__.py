# arqap/__init__.py

"""
ARQAP inventory API main package.

The `core` subpackage holds settings, database sessions, the generic CRUD base
and the domain exceptions. Each business domain (storage locations, artefacts,
requesters, movements and loans) lives under `domains`.
"""

APP_NAME = "ARQAP Inventory API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api/v1"  # common prefix applied in main.py

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Archaeological collection inventory backend: artefacts, storage cells, movements and loans."
__all__ = []
