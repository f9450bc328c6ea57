from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from resources_api.data_access import driver_repo
from resources_api.db.session import get_async_db
from resources_api.schemas.driver_schemas import (
    PESEL_EXAMPLE,
    DriverCreate,
    DriverRead,
    DriverUpdate,
)

router = APIRouter()

NOT_FOUND = "Not found"

DriverId = Annotated[int, Path(description="Driver's PESEL number", examples=[PESEL_EXAMPLE])]

NOT_FOUND_RESPONSE = {404: {"description": NOT_FOUND}}
SERVER_ERROR_RESPONSE = {500: {"description": "SQL server error"}}


@router.get(
    "",
    response_model=List[DriverRead],
    responses={**SERVER_ERROR_RESPONSE},
)
async def get_drivers(
    db: Annotated[AsyncSession, Depends(get_async_db)],
):
    """List all drivers with their details, ordered by PESEL number."""
    await driver_repo.probe(db)
    return await driver_repo.get_all(db)


@router.get(
    "/{driver_id}",
    response_model=DriverRead,
    responses={**NOT_FOUND_RESPONSE, **SERVER_ERROR_RESPONSE},
)
async def get_driver(
    driver_id: DriverId,
    db: Annotated[AsyncSession, Depends(get_async_db)],
):
    """Get a driver by PESEL number."""
    driver = await driver_repo.get(db, driver_id)
    if not driver:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return driver


@router.put(
    "/{driver_id}",
    response_model=DriverRead,
    responses={**NOT_FOUND_RESPONSE, **SERVER_ERROR_RESPONSE},
)
async def update_driver(
    driver_id: DriverId,
    driver_update: DriverUpdate,
    db: Annotated[AsyncSession, Depends(get_async_db)],
):
    """
    Update a driver's data (partial update).
    Only the new values need to be given, the rest is kept as stored.
    Null values are ignored and the PESEL number never changes.
    """
    driver = await driver_repo.get(db, driver_id)
    if not driver:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    if driver_repo.merge(driver, driver_update):
        await driver_repo.commit(db)

    return await driver_repo.refresh(db, driver)


@router.post(
    "",
    response_model=DriverRead,
    status_code=status.HTTP_201_CREATED,
    responses={**SERVER_ERROR_RESPONSE},
)
async def create_driver(
    driver_in: DriverCreate,
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_async_db)],
):
    """Add a new driver to the register."""
    await driver_repo.probe(db)

    driver = driver_repo.add(db, obj_in=driver_in)
    await driver_repo.commit(db)

    response.headers["Location"] = str(request.url_for("get_driver", driver_id=driver.id))
    return driver


@router.delete(
    "/{driver_id}",
    response_model=DriverRead,
    responses={**NOT_FOUND_RESPONSE, **SERVER_ERROR_RESPONSE},
)
async def delete_driver(
    driver_id: DriverId,
    db: Annotated[AsyncSession, Depends(get_async_db)],
):
    """Remove a driver from the register and return the deleted record."""
    driver = await driver_repo.get(db, driver_id)
    if not driver:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    snapshot = DriverRead.model_validate(driver)
    await driver_repo.remove(db, db_obj=driver)
    await driver_repo.commit(db)
    return snapshot
