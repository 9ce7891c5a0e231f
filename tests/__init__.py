# tests/__init__.py

"""
Test suite of the ARQAP inventory API.

- `conftest.py`: shared fixtures (in-memory database, test client, sample data)
- `domains/`: tests grouped by business domain (loc, art, req, mov)
"""

__title__ = "ARQAP API Tests"
__all__ = []
