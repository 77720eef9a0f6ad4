from fastapi import APIRouter, Depends, HTTPException

from pawconnect.api.v1.routes.deps import get_storage
from pawconnect.schemas import Comment, CommentCreate, UserPublic
from pawconnect.storage import Storage

router = APIRouter()


class CommentWithUser(Comment):
    user: UserPublic | None = None


@router.get("/post/{post_id}", response_model=list[CommentWithUser])
def list_post_comments(post_id: int, storage: Storage = Depends(get_storage)):
    out = []
    for comment in storage.get_comments_by_post_id(post_id):
        user = storage.get_user(comment.user_id)
        out.append(
            CommentWithUser(**comment.model_dump(), user=UserPublic.model_validate(user) if user else None)
        )
    return out


@router.post("", response_model=Comment)
def create_comment(payload: CommentCreate, storage: Storage = Depends(get_storage)):
    if not storage.get_post(payload.post_id):
        raise HTTPException(status_code=404, detail="Post not found")
    return storage.create_comment(payload)


@router.delete("/{comment_id}")
def delete_comment(comment_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_comment(comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment removed"}
