from fastapi import APIRouter, Depends, HTTPException

from pawconnect.api.v1.routes.deps import get_storage
from pawconnect.schemas import Pet, Post, PostCreate, PostUpdate, UserPublic
from pawconnect.storage import Storage

router = APIRouter()


class FeedPost(Post):
    pet: Pet | None = None
    user: UserPublic | None = None


@router.get("/feed/{user_id}", response_model=list[FeedPost], summary="Feed of own and followed pets")
def get_feed(user_id: int, storage: Storage = Depends(get_storage)):
    out = []
    for post in storage.get_posts_for_feed(user_id):
        user = storage.get_user(post.user_id)
        out.append(
            FeedPost(
                **post.model_dump(),
                pet=storage.get_pet(post.pet_id),
                user=UserPublic.model_validate(user) if user else None,
            )
        )
    return out


@router.get("/pet/{pet_id}", response_model=list[Post])
def list_pet_posts(pet_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_posts_by_pet_id(pet_id)


@router.post("", response_model=Post)
def create_post(payload: PostCreate, storage: Storage = Depends(get_storage)):
    if not storage.get_pet(payload.pet_id):
        raise HTTPException(status_code=404, detail="Pet not found")
    if not storage.get_user(payload.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return storage.create_post(payload)


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: int, storage: Storage = Depends(get_storage)):
    post = storage.get_post(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.put("/{post_id}", response_model=Post)
def update_post(post_id: int, payload: PostUpdate, storage: Storage = Depends(get_storage)):
    post = storage.update_post(post_id, payload.model_dump(exclude_unset=True))
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post
