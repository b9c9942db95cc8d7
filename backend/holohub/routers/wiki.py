"""Holo-Wiki routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from holohub.dependencies import SessionDep, WikiServiceDep
from holohub.models import FormattedWikiEntry, WikiEntry, WikiEntryCreate, WikiEntryUpdate
from holohub.services.formatter import format_wiki_entry
from holohub.services.wiki import NpcNameConflictError

router = APIRouter()


@router.post("/", response_model=WikiEntry, status_code=201)
async def create_entry(body: WikiEntryCreate, service: WikiServiceDep, session: SessionDep):
    try:
        return await service.create_entry(session, body)
    except NpcNameConflictError as exc:
        raise HTTPException(409, str(exc)) from exc


@router.get("/", response_model=list[WikiEntry])
async def list_entries(
    service: WikiServiceDep,
    type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
):
    try:
        return await service.list_entries(type=type, search=search)
    except ValueError as exc:
        raise HTTPException(400, f"Unknown wiki entry type: {type}") from exc


@router.get("/{entry_id}", response_model=WikiEntry)
async def get_entry(entry_id: str, service: WikiServiceDep):
    entry = await service.get_entry(entry_id)
    if not entry:
        raise HTTPException(404, "Wiki entry not found")
    return entry


@router.get("/{entry_id}/formatted", response_model=FormattedWikiEntry)
async def get_formatted_entry(entry_id: str, service: WikiServiceDep):
    entry = await service.get_entry(entry_id)
    if not entry:
        raise HTTPException(404, "Wiki entry not found")
    return format_wiki_entry(entry)


@router.put("/{entry_id}", response_model=WikiEntry)
async def update_entry(entry_id: str, body: WikiEntryUpdate, service: WikiServiceDep, session: SessionDep):
    try:
        entry = await service.update_entry(entry_id, body)
    except NpcNameConflictError as exc:
        raise HTTPException(409, str(exc)) from exc
    if not entry:
        raise HTTPException(404, "Wiki entry not found")
    return entry


@router.delete("/{entry_id}")
async def delete_entry(entry_id: str, service: WikiServiceDep, session: SessionDep):
    deleted = await service.delete_entry(entry_id)
    if not deleted:
        raise HTTPException(404, "Wiki entry not found")
    return {"status": "deleted", "id": entry_id}
