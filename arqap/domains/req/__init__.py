# arqap/domains/req/__init__.py

"""
The 'req' domain package: requesters of movements and loans
(researchers, departments and exhibitions).
"""

__title__ = "ARQAP Requester Domain"
__description__ = "Manages requesters of internal movements and loans."
__version__ = "0.1.0"
__all__ = []
