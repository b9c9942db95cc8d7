"""Blog post routes."""

from fastapi import APIRouter, HTTPException

from holohub.dependencies import BlogServiceDep, SessionDep
from holohub.models import BlogPost, BlogPostCreate, BlogPostUpdate

router = APIRouter()


@router.get("/", response_model=list[BlogPost])
async def list_posts(service: BlogServiceDep):
    return await service.list_posts()


@router.post("/", response_model=BlogPost, status_code=201)
async def create_post(body: BlogPostCreate, service: BlogServiceDep, session: SessionDep):
    return await service.create_post(session, body)


@router.get("/{post_id}", response_model=BlogPost)
async def get_post(post_id: str, service: BlogServiceDep):
    post = await service.get_post(post_id)
    if not post:
        raise HTTPException(404, "Blog post not found")
    return post


@router.put("/{post_id}", response_model=BlogPost)
async def update_post(post_id: str, body: BlogPostUpdate, service: BlogServiceDep, session: SessionDep):
    post = await service.update_post(post_id, body)
    if not post:
        raise HTTPException(404, "Blog post not found")
    return post


@router.delete("/{post_id}")
async def delete_post(post_id: str, service: BlogServiceDep, session: SessionDep):
    deleted = await service.delete_post(post_id)
    if not deleted:
        raise HTTPException(404, "Blog post not found")
    return {"status": "deleted", "id": post_id}
