# arqap/domains/models/__init__.py

"""
Imports every domain's SQLModel table in one place so that SQLModel.metadata
knows all tables (test fixtures and create_all rely on this).
"""

# loc (Shelf, PhysicalLocation)
from arqap.domains.loc.models import Shelf, PhysicalLocation

# geo (Country, Region, ArchaeologicalSite)
from arqap.domains.geo.models import Country, Region, ArchaeologicalSite

# cat (Collection, Archaeologist, INPLClassifier, InternalClassifier)
from arqap.domains.cat.models import Collection, Archaeologist, INPLClassifier, InternalClassifier

# art (Artefact, Mention)
from arqap.domains.art.models import Artefact, Mention

# req (Requester)
from arqap.domains.req.models import Requester

# mov (InternalMovement, Loan)
from arqap.domains.mov.models import InternalMovement, Loan

__all__ = [
    "Shelf", "PhysicalLocation",
    "Country", "Region", "ArchaeologicalSite",
    "Collection", "Archaeologist", "INPLClassifier", "InternalClassifier",
    "Artefact", "Mention",
    "Requester",
    "InternalMovement", "Loan",
]
