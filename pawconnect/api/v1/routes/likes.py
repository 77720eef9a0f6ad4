from fastapi import APIRouter, Depends, HTTPException

from pawconnect.api.v1.routes.deps import get_notifier, get_storage
from pawconnect.schemas import Like, LikeCreate
from pawconnect.services.notifications import NotificationHub
from pawconnect.storage import Storage

router = APIRouter()


@router.post("", response_model=Like)
def like_post(
    payload: LikeCreate,
    storage: Storage = Depends(get_storage),
    notifier: NotificationHub = Depends(get_notifier),
):
    post = storage.get_post(payload.post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")

    if storage.get_like(payload.user_id, payload.post_id):
        raise HTTPException(status_code=409, detail="Already liked this post")

    like = storage.create_like(payload)
    notifier.notify_user(post.user_id, payload.user_id, "like", post_id=post.id)
    return like


@router.delete("/{user_id}/{post_id}")
def unlike_post(user_id: int, post_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_like(user_id, post_id):
        raise HTTPException(status_code=404, detail="Like not found")
    return {"message": "Like removed"}


@router.get("/post/{post_id}", response_model=list[Like])
def list_post_likes(post_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_likes_by_post_id(post_id)
