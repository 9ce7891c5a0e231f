# arqap/core/exceptions.py

"""
Domain errors raised by the CRUD layer.

Routers do not translate these one by one: `main.py` registers a handler per
class, so a `NotFoundError` raised anywhere becomes a 404 and a
`BusinessRuleError` becomes a 409. Anything else that escapes is a server error.
"""

from fastapi import status


class ArqapError(Exception):
    """Base class for every error the application raises on purpose."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_type: str = "arqap_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ArqapError):
    """A referenced row (artefact, location, movement, loan, ...) does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"


class BusinessRuleError(ArqapError):
    """The request is well formed but the current state forbids it."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "business_rule_violation"


class ArtefactNotAvailableError(BusinessRuleError):
    error_type = "artefact_not_available"

    def __init__(self, artefact_id: int):
        super().__init__(f"Artefact {artefact_id} is not available for loan (already on loan)")
        self.artefact_id = artefact_id


class ReferenceConflictError(ArqapError):
    """Deleting or changing a row that other rows still reference."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "reference_conflict"
