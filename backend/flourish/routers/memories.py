"""Event memories (photos) and comment routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from flourish.database import get_db
from flourish.models.memory import EventComment, EventMemory
from flourish.models.user import User
from flourish.schemas.memory import CommentCreate, CommentOut, MemoryCreate, MemoryOut
from flourish.services.event_service import get_event

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _get_memory(db: Session, memory_id: str) -> EventMemory:
    memory = db.query(EventMemory).filter(EventMemory.id == memory_id).first()
    if not memory:
        raise HTTPException(status_code=404, detail="Memory not found")
    return memory


@router.post("/events/{event_id}/memories", response_model=MemoryOut, status_code=status.HTTP_201_CREATED)
def create_memory(event_id: str, payload: MemoryCreate, db: Session = Depends(get_db)):
    """Share a photo from an event."""
    get_event(db, event_id)
    user = _get_user(db, payload.user_id)
    memory = EventMemory(
        event_id=event_id,
        user_id=user.user_id,
        user_name=user.display_name,
        user_avatar=user.avatar_url,
        image_url=payload.image_url,
        caption=payload.caption,
    )
    db.add(memory)
    db.commit()
    db.refresh(memory)
    logger.info("User %s shared memory %s for event %s", user.user_id, memory.id, event_id)
    return memory


@router.get("/events/{event_id}/memories", response_model=list[MemoryOut])
def list_memories(event_id: str, db: Session = Depends(get_db)):
    return (
        db.query(EventMemory)
        .filter(EventMemory.event_id == event_id)
        .order_by(EventMemory.created_at.desc())
        .all()
    )


@router.post("/memories/{memory_id}/like", response_model=MemoryOut)
def like_memory(memory_id: str, db: Session = Depends(get_db)):
    memory = _get_memory(db, memory_id)
    memory.likes_count += 1
    db.commit()
    db.refresh(memory)
    return memory


@router.post("/memories/{memory_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def add_comment(memory_id: str, payload: CommentCreate, db: Session = Depends(get_db)):
    """Comment on a memory; the memory's comment counter follows."""
    memory = _get_memory(db, memory_id)
    user = _get_user(db, payload.user_id)
    comment = EventComment(
        memory_id=memory.id,
        user_id=user.user_id,
        user_name=user.display_name,
        user_avatar=user.avatar_url,
        content=payload.content,
    )
    db.add(comment)
    memory.comments_count += 1
    db.commit()
    db.refresh(comment)
    logger.info("User %s commented on memory %s", user.user_id, memory_id)
    return comment


@router.get("/memories/{memory_id}/comments", response_model=list[CommentOut])
def list_comments(memory_id: str, db: Session = Depends(get_db)):
    _get_memory(db, memory_id)
    return (
        db.query(EventComment)
        .filter(EventComment.memory_id == memory_id)
        .order_by(EventComment.created_at)
        .all()
    )
