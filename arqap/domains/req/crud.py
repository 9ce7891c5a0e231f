# arqap/domains/req/crud.py

"""
CRUD logic of the 'req' domain (requesters).
"""

from typing import Union, Dict, Any, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.crud_base import CRUDBase
from arqap.core.exceptions import BusinessRuleError, ReferenceConflictError
from . import models as req_models
from . import schemas as req_schemas
from arqap.domains.mov.models import InternalMovement as MovInternalMovement, Loan as MovLoan


class CRUDRequester(
    CRUDBase[
        req_models.Requester,
        req_schemas.RequesterCreate,
        req_schemas.RequesterUpdate
    ]
):
    def __init__(self):
        super().__init__(model=req_models.Requester)

    async def get_by_dni(self, db: AsyncSession, *, dni: str) -> Optional[req_models.Requester]:
        return await self.get_by_attribute(db, attribute="dni", value=dni)

    async def create(self, db: AsyncSession, *, obj_in: req_schemas.RequesterCreate) -> req_models.Requester:
        """DNI, when given, must be unique."""
        if obj_in.dni and await self.get_by_dni(db, dni=obj_in.dni):
            raise BusinessRuleError(f"Requester with DNI {obj_in.dni} already exists.")
        return await super().create(db, obj_in=obj_in)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: req_models.Requester,
        obj_in: Union[req_schemas.RequesterUpdate, Dict[str, Any]]
    ) -> req_models.Requester:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        new_dni = update_data.get("dni")
        if new_dni and new_dni != db_obj.dni and await self.get_by_dni(db, dni=new_dni):
            raise BusinessRuleError(f"Requester with DNI {new_dni} already exists.")
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[req_models.Requester]:
        """
        Deletes a requester. Refused while movements or loans reference it.
        """
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None

        movement_stmt = select(MovInternalMovement.id).where(MovInternalMovement.requester_id == id).limit(1)
        loan_stmt = select(MovLoan.id).where(MovLoan.requester_id == id).limit(1)
        if (await db.execute(movement_stmt)).first() or (await db.execute(loan_stmt)).first():
            raise ReferenceConflictError(
                f"Cannot delete requester {id}: it is referenced by internal movements or loans."
            )

        return await super().delete(db, id=id)


requester = CRUDRequester()
