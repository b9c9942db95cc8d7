"""Chat channel and conversation log routes."""

from fastapi import APIRouter, HTTPException

from holohub.dependencies import ChatServiceDep, ComposerDep, SessionDep
from holohub.models import (
    Chatroom,
    ChatroomCreate,
    ChatroomUpdate,
    ChatMessage,
    ChatMessageSubmit,
    ChatSubmitResponse,
)
from holohub.services.composer import ComposerBusyError

router = APIRouter()


@router.get("/", response_model=list[Chatroom])
async def list_chatrooms(service: ChatServiceDep):
    return await service.list_rooms()


@router.post("/", response_model=Chatroom, status_code=201)
async def create_chatroom(body: ChatroomCreate, service: ChatServiceDep, session: SessionDep):
    return await service.create_room(session, body)


@router.get("/{room_id}", response_model=Chatroom)
async def get_chatroom(room_id: str, service: ChatServiceDep):
    room = await service.get_room(room_id)
    if not room:
        raise HTTPException(404, "Chatroom not found")
    return room


@router.put("/{room_id}", response_model=Chatroom)
async def update_chatroom(room_id: str, body: ChatroomUpdate, service: ChatServiceDep, session: SessionDep):
    room = await service.update_room(room_id, body)
    if not room:
        raise HTTPException(404, "Chatroom not found")
    return room


@router.delete("/{room_id}")
async def delete_chatroom(room_id: str, service: ChatServiceDep, session: SessionDep):
    deleted = await service.delete_room(room_id)
    if not deleted:
        raise HTTPException(404, "Chatroom not found")
    return {"status": "deleted", "id": room_id}


@router.get("/{room_id}/messages", response_model=list[ChatMessage])
async def list_messages(room_id: str, service: ChatServiceDep):
    if not await service.get_room(room_id):
        raise HTTPException(404, "Chatroom not found")
    return await service.list_messages(room_id)


@router.post("/{room_id}/messages", response_model=ChatSubmitResponse, status_code=201)
async def send_message(
    room_id: str,
    body: ChatMessageSubmit,
    composer: ComposerDep,
    session: SessionDep,
):
    try:
        return await composer.submit(session, room_id, body.text)
    except ComposerBusyError as exc:
        raise HTTPException(409, str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
