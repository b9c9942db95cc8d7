"""
Dependency injection for FastAPI routes.

Provides typed service dependencies that enable IDE navigation (Ctrl+Click).
"""

from typing import Annotated, Optional
from fastapi import Depends, Header, HTTPException, Request

from holohub.models import SessionContext
from holohub.services.blogs import BlogService
from holohub.services.chat import ChatService
from holohub.services.composer import MessageComposer
from holohub.services.map_points import MapPointService
from holohub.services.profiles import ProfileService
from holohub.services.wiki import WikiService


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_wiki_service(request: Request) -> WikiService:
    return request.app.state.wiki_service


def get_blog_service(request: Request) -> BlogService:
    return request.app.state.blog_service


def get_map_point_service(request: Request) -> MapPointService:
    return request.app.state.map_point_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_composer(request: Request) -> MessageComposer:
    return request.app.state.composer


async def get_session(
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> SessionContext:
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(401, "Missing X-User-Id header")
    return await profiles.session_for(user_id)


ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
WikiServiceDep = Annotated[WikiService, Depends(get_wiki_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
MapPointServiceDep = Annotated[MapPointService, Depends(get_map_point_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
ComposerDep = Annotated[MessageComposer, Depends(get_composer)]
SessionDep = Annotated[SessionContext, Depends(get_session)]
