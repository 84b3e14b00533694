"""User ORM model — creators, organizers and members share one table."""
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from flourish.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    display_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    professional_title = Column(String(150), nullable=True)
    avatar_url = Column(String(1000), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
