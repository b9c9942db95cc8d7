"""
HoloHub - FastAPI Backend
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import socketio

from holohub.config import settings
from holohub.database.db import init_db
from holohub.logging import setup_logging, get_logger
from holohub.routers import (
    blogs,
    chatrooms,
    map_points,
    profiles,
    wiki,
)
from holohub.services.backboard import BackboardService
from holohub.services.blogs import BlogService
from holohub.services.chat import ChatService
from holohub.services.composer import MessageComposer
from holohub.services.map_points import MapPointService
from holohub.services.npc_responder import NpcResponder
from holohub.services.profiles import ProfileService
from holohub.services.realtime import HUB_ROOM, RealtimeService, chatroom_channel
from holohub.services.wiki import WikiService

logger = get_logger('main')

# Socket.IO server for real-time chat and directory updates
sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins='*'
)


def init_services(
    app: FastAPI,
    db_path: str,
    backboard: BackboardService,
    realtime: RealtimeService,
) -> None:
    app.state.backboard = backboard
    app.state.realtime = realtime
    app.state.chat_service = ChatService(db_path=db_path, realtime=realtime)
    app.state.wiki_service = WikiService(db_path=db_path, realtime=realtime)
    app.state.blog_service = BlogService(db_path=db_path, realtime=realtime)
    app.state.map_point_service = MapPointService(db_path=db_path, realtime=realtime)
    app.state.profile_service = ProfileService(db_path=db_path, realtime=realtime)
    app.state.npc_responder = NpcResponder(
        chat=app.state.chat_service,
        wiki=app.state.wiki_service,
        backboard=backboard,
    )
    app.state.composer = MessageComposer(
        chat=app.state.chat_service,
        responder=app.state.npc_responder,
        realtime=realtime,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Starting HoloHub API")

    await init_db()
    logger.info("Database initialized")

    backboard = BackboardService()
    await backboard.initialize()
    if backboard.is_available:
        await backboard.ensure_assistant()

    init_services(
        app,
        db_path=settings.DATABASE_PATH,
        backboard=backboard,
        realtime=RealtimeService(sio),
    )
    logger.info("Services initialized")

    yield

    logger.info("Waiting for in-flight NPC replies")
    await app.state.composer.wait_idle()
    logger.info("Shutting down application")


def create_app() -> FastAPI:
    app = FastAPI(
        title="HoloHub API",
        description="Real-time roleplay hub with persistent AI NPCs",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chatrooms.router, prefix="/api/chatrooms", tags=["Chat"])
    app.include_router(wiki.router, prefix="/api/wiki", tags=["Holo-Wiki"])
    app.include_router(blogs.router, prefix="/api/blogs", tags=["Data Logs"])
    app.include_router(map_points.router, prefix="/api/map-points", tags=["Galaxy Map"])
    app.include_router(profiles.router, prefix="/api/profiles", tags=["Profiles"])

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": "holohub",
            "backboard_available": app.state.backboard.is_available if hasattr(app.state, 'backboard') else False,
        }

    @app.get("/")
    async def root():
        return {
            "name": "HoloHub API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    return app


@sio.event
async def connect(sid, environ):
    await sio.enter_room(sid, HUB_ROOM)
    query_string = environ.get('QUERY_STRING', '')
    if 'roomId=' in query_string:
        room_id = query_string.split('roomId=')[-1].split('&')[0]
        await sio.enter_room(sid, chatroom_channel(room_id))
        logger.debug(f"Client {sid[:8]}... joined chatroom: {room_id[:8]}...")


@sio.event
async def disconnect(sid, reason=None):
    logger.debug(f"Client {sid[:8]}... disconnected")


@sio.event
async def join_chatroom(sid, data):
    room_id = str((data or {}).get('roomId') or '').strip()
    if room_id:
        await sio.enter_room(sid, chatroom_channel(room_id))


@sio.event
async def leave_chatroom(sid, data):
    room_id = str((data or {}).get('roomId') or '').strip()
    if room_id:
        await sio.leave_room(sid, chatroom_channel(room_id))


app = create_app()
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)
