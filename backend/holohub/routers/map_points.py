"""Galaxy map routes."""

from fastapi import APIRouter, HTTPException

from holohub.dependencies import MapPointServiceDep, SessionDep
from holohub.models import MapPoint, MapPointCreate, MapPointUpdate

router = APIRouter()


@router.get("/", response_model=list[MapPoint])
async def list_points(service: MapPointServiceDep):
    return await service.list_points()


@router.post("/", response_model=MapPoint, status_code=201)
async def create_point(body: MapPointCreate, service: MapPointServiceDep, session: SessionDep):
    try:
        return await service.create_point(body)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc


@router.get("/{point_id}", response_model=MapPoint)
async def get_point(point_id: str, service: MapPointServiceDep):
    point = await service.get_point(point_id)
    if not point:
        raise HTTPException(404, "Map point not found")
    return point


@router.put("/{point_id}", response_model=MapPoint)
async def update_point(point_id: str, body: MapPointUpdate, service: MapPointServiceDep, session: SessionDep):
    try:
        point = await service.update_point(point_id, body)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    if not point:
        raise HTTPException(404, "Map point not found")
    return point


@router.delete("/{point_id}")
async def delete_point(point_id: str, service: MapPointServiceDep, session: SessionDep):
    deleted = await service.delete_point(point_id)
    if not deleted:
        raise HTTPException(404, "Map point not found")
    return {"status": "deleted", "id": point_id}
