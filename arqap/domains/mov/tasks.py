# arqap/domains/mov/tasks.py

"""
arq job that repairs drift between movement history and artefact rows.

- an artefact with several active movements keeps only the newest one open;
- an artefact's location is realigned with the destination of its active
  movement, or of its latest movement when none is active.
"""

import logging
from typing import Dict, Any

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.database import get_async_session_context
from arqap.domains.art import crud as art_crud
from arqap.domains.mov import crud as mov_crud
from arqap.domains.mov import models as mov_models

logger = logging.getLogger(__name__)


async def audit_active_movements(db: AsyncSession) -> Dict[str, Any]:
    """
    Runs the audit inside the given session. The caller commits.
    """
    movement = mov_models.InternalMovement
    closed = 0
    realigned = 0

    duplicated_stmt = (
        select(movement.artefact_id)
        .where(movement.return_date.is_(None), movement.return_time.is_(None))
        .group_by(movement.artefact_id)
        .having(func.count(movement.id) > 1)
    )
    duplicated_ids = (await db.execute(duplicated_stmt)).scalars().all()

    closing_date, closing_time = mov_crud.closing_stamp()
    for artefact_id in duplicated_ids:
        active = await mov_crud.internal_movement.get_active(db, artefact_id=artefact_id)
        for stale in active[1:]:
            stale.return_date = closing_date
            stale.return_time = closing_time
            db.add(stale)
            closed += 1
        logger.warning(
            "Artefact %s had %d active movements; kept movement %s open",
            artefact_id, len(active), active[0].id
        )
    await db.flush()

    artefact_ids = (await db.execute(select(movement.artefact_id).distinct())).scalars().all()
    for artefact_id in artefact_ids:
        active = await mov_crud.internal_movement.get_active(db, artefact_id=artefact_id)
        current = active[0] if active else await mov_crud.internal_movement.get_latest(db, artefact_id=artefact_id)
        if current is None:
            continue

        db_artefact = await art_crud.artefact.get_for_update(db, id=artefact_id)
        if db_artefact is None:
            continue
        if db_artefact.physical_location_id != current.to_physical_location_id:
            logger.warning(
                "Artefact %s location %s does not match movement %s; set to %s",
                artefact_id, db_artefact.physical_location_id, current.id, current.to_physical_location_id
            )
            await art_crud.artefact.move_to(db, db_obj=db_artefact, location_id=current.to_physical_location_id)
            realigned += 1

    return {"status": "success", "closed": closed, "realigned": realigned}


async def audit_active_movements_task(ctx):
    """
    Periodic movement audit run by the arq worker.
    """
    logger.info("arq job: movement audit started")
    async with get_async_session_context() as db:
        summary = await audit_active_movements(db)
    logger.info(
        "Movement audit finished: %d movement(s) closed, %d artefact(s) realigned",
        summary["closed"], summary["realigned"]
    )
    return summary
