# arqap/domains/geo/__init__.py

"""
The 'geo' domain package: where artefacts were found.

Country -> Region -> ArchaeologicalSite hierarchy referenced by artefacts.
"""

__title__ = "ARQAP Geography Domain"
__description__ = "Manages countries, regions and archaeological sites."
__version__ = "0.1.0"
__all__ = []
