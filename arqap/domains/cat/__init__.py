# arqap/domains/cat/__init__.py

"""
The 'cat' domain package: catalogue registries artefacts are filed under.

- collections and the archaeologists who found the pieces
- INPL classifiers (national registry records)
- internal classifiers (name + optional number, unique together)
"""

__title__ = "ARQAP Catalogue Domain"
__description__ = "Manages collections, archaeologists and classifiers."
__version__ = "0.1.0"
__all__ = []
