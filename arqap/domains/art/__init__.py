# arqap/domains/art/__init__.py

"""
The 'art' domain package: the artefact registry.

`available` and `physical_location_id` of an artefact belong to the movement
and loan lifecycle (`arqap.domains.mov`); the generic update path of this
package never writes them.
"""

__title__ = "ARQAP Artefact Domain"
__description__ = "Manages archaeological artefact records."
__version__ = "0.1.0"
__all__ = []
