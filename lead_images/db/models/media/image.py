# lead_images/db/models/media/image.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, LargeBinary

MAX_FILE_NAME_LENGTH = 255

class ProfileImage(SQLModel, table=True):
    __tablename__ = "profile_images"
    id: Optional[int] = Field(default=None, primary_key=True)
    profile_id: int = Field(foreign_key="profiles.id", index=True)
    image_data: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    file_name: str = Field(max_length=MAX_FILE_NAME_LENGTH)
    content_type: str = Field(max_length=100)
    uploaded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    # Assigned once at upload; not renumbered when siblings are deleted
    display_order: int
    is_priority: bool = Field(default=True)
