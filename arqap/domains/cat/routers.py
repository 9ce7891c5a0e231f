# arqap/domains/cat/routers.py

"""
API endpoints of the 'cat' domain.

- collections: `/collections/`
- archaeologists: `/archaeologists/`
- INPL classifiers: `/inpl_classifiers/`
- internal classifiers: `/internal_classifiers/` (plus lookups by name)

Deleting a registry row that artefacts still reference returns 409.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core import dependencies as deps
from arqap.domains.cat import crud as cat_crud
from arqap.domains.cat import schemas as cat_schemas

router = APIRouter(
    tags=["Catalogue"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. collections
# =============================================================================
@router.post("/collections/", response_model=cat_schemas.CollectionRead, status_code=status.HTTP_201_CREATED, summary="Create a collection")
async def create_collection(
    collection_create: cat_schemas.CollectionCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.collection.create(db=db, obj_in=collection_create)


@router.get("/collections/", response_model=List[cat_schemas.CollectionRead], summary="List collections")
async def read_collections(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.collection.get_multi(db, skip=skip, limit=limit)


@router.get("/collections/{collection_id}", response_model=cat_schemas.CollectionRead, summary="Get a collection")
async def read_collection(
    collection_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_collection = await cat_crud.collection.get(db, id=collection_id)
    if db_collection is None:
        raise HTTPException(status_code=404, detail="Collection not found")
    return db_collection


@router.put("/collections/{collection_id}", response_model=cat_schemas.CollectionRead, summary="Update a collection")
async def update_collection(
    collection_id: int,
    collection_update: cat_schemas.CollectionUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_collection = await cat_crud.collection.get(db, id=collection_id)
    if db_collection is None:
        raise HTTPException(status_code=404, detail="Collection not found")
    return await cat_crud.collection.update(db=db, db_obj=db_collection, obj_in=collection_update)


@router.delete("/collections/{collection_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a collection")
async def delete_collection(
    collection_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_collection = await cat_crud.collection.remove(db, id=collection_id)
    if db_collection is None:
        raise HTTPException(status_code=404, detail="Collection not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# 2. archaeologists
# =============================================================================
@router.post("/archaeologists/", response_model=cat_schemas.ArchaeologistRead, status_code=status.HTTP_201_CREATED, summary="Create an archaeologist")
async def create_archaeologist(
    archaeologist_create: cat_schemas.ArchaeologistCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.archaeologist.create(db=db, obj_in=archaeologist_create)


@router.get("/archaeologists/", response_model=List[cat_schemas.ArchaeologistRead], summary="List archaeologists")
async def read_archaeologists(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.archaeologist.get_multi(db, skip=skip, limit=limit)


@router.get("/archaeologists/{archaeologist_id}", response_model=cat_schemas.ArchaeologistRead, summary="Get an archaeologist")
async def read_archaeologist(
    archaeologist_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_archaeologist = await cat_crud.archaeologist.get(db, id=archaeologist_id)
    if db_archaeologist is None:
        raise HTTPException(status_code=404, detail="Archaeologist not found")
    return db_archaeologist


@router.put("/archaeologists/{archaeologist_id}", response_model=cat_schemas.ArchaeologistRead, summary="Update an archaeologist")
async def update_archaeologist(
    archaeologist_id: int,
    archaeologist_update: cat_schemas.ArchaeologistUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_archaeologist = await cat_crud.archaeologist.get(db, id=archaeologist_id)
    if db_archaeologist is None:
        raise HTTPException(status_code=404, detail="Archaeologist not found")
    return await cat_crud.archaeologist.update(db=db, db_obj=db_archaeologist, obj_in=archaeologist_update)


@router.delete("/archaeologists/{archaeologist_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an archaeologist")
async def delete_archaeologist(
    archaeologist_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_archaeologist = await cat_crud.archaeologist.remove(db, id=archaeologist_id)
    if db_archaeologist is None:
        raise HTTPException(status_code=404, detail="Archaeologist not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# 3. INPL classifiers
# =============================================================================
@router.post("/inpl_classifiers/", response_model=cat_schemas.INPLClassifierRead, status_code=status.HTTP_201_CREATED, summary="Create an INPL classifier")
async def create_inpl_classifier(
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.inpl_classifier.create(db=db, obj_in=cat_schemas.INPLClassifierCreate())


@router.get("/inpl_classifiers/", response_model=List[cat_schemas.INPLClassifierRead], summary="List INPL classifiers")
async def read_inpl_classifiers(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.inpl_classifier.get_multi(db, skip=skip, limit=limit)


@router.get("/inpl_classifiers/{classifier_id}", response_model=cat_schemas.INPLClassifierRead, summary="Get an INPL classifier")
async def read_inpl_classifier(
    classifier_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_classifier = await cat_crud.inpl_classifier.get(db, id=classifier_id)
    if db_classifier is None:
        raise HTTPException(status_code=404, detail="INPL classifier not found")
    return db_classifier


@router.delete("/inpl_classifiers/{classifier_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an INPL classifier")
async def delete_inpl_classifier(
    classifier_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_classifier = await cat_crud.inpl_classifier.remove(db, id=classifier_id)
    if db_classifier is None:
        raise HTTPException(status_code=404, detail="INPL classifier not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# 4. internal classifiers
# =============================================================================
@router.post("/internal_classifiers/", response_model=cat_schemas.InternalClassifierRead, status_code=status.HTTP_201_CREATED, summary="Create an internal classifier")
async def create_internal_classifier(
    classifier_create: cat_schemas.InternalClassifierCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Returns 409 when a classifier with the same name and number exists
    (two empty numbers count as the same).
    """
    return await cat_crud.internal_classifier.create(db=db, obj_in=classifier_create)


@router.get("/internal_classifiers/", response_model=List[cat_schemas.InternalClassifierRead], summary="List internal classifiers")
async def read_internal_classifiers(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.internal_classifier.get_multi(db, skip=skip, limit=limit)


@router.get("/internal_classifiers/names", response_model=List[str], summary="Distinct internal classifier names")
async def read_internal_classifier_names(
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.internal_classifier.get_names(db)


@router.get("/internal_classifiers/name/{name}", response_model=List[cat_schemas.InternalClassifierRead], summary="Internal classifiers by name")
async def read_internal_classifiers_by_name(
    name: str,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await cat_crud.internal_classifier.get_by_name(db, name=name)


@router.get("/internal_classifiers/{classifier_id}", response_model=cat_schemas.InternalClassifierRead, summary="Get an internal classifier")
async def read_internal_classifier(
    classifier_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_classifier = await cat_crud.internal_classifier.get(db, id=classifier_id)
    if db_classifier is None:
        raise HTTPException(status_code=404, detail="Internal classifier not found")
    return db_classifier


@router.put("/internal_classifiers/{classifier_id}", response_model=cat_schemas.InternalClassifierRead, summary="Update an internal classifier")
async def update_internal_classifier(
    classifier_id: int,
    classifier_update: cat_schemas.InternalClassifierUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_classifier = await cat_crud.internal_classifier.get(db, id=classifier_id)
    if db_classifier is None:
        raise HTTPException(status_code=404, detail="Internal classifier not found")
    return await cat_crud.internal_classifier.update(db=db, db_obj=db_classifier, obj_in=classifier_update)


@router.delete("/internal_classifiers/{classifier_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an internal classifier")
async def delete_internal_classifier(
    classifier_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_classifier = await cat_crud.internal_classifier.remove(db, id=classifier_id)
    if db_classifier is None:
        raise HTTPException(status_code=404, detail="Internal classifier not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
