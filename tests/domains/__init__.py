# tests/domains/__init__.py

"""
Domain tests.

- `test_loc_n.py`: shelves and physical locations
- `test_art_n.py`: artefacts
- `test_req_n.py`: requesters
- `test_mov_*_n.py`: internal movements, loans and the movement audit
"""

__all__ = []
