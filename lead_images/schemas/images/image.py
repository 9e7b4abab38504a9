# lead_images/schemas/images/image.py
import base64
from pydantic import BaseModel, Field, model_validator
from typing import Annotated, List
from datetime import datetime

from ...core.config import settings
from ...db.models.media.image import MAX_FILE_NAME_LENGTH

FileName = Annotated[str, Field(min_length=1, max_length=MAX_FILE_NAME_LENGTH)]

class ProfileImageResponse(BaseModel):
    id: int
    profile_id: int
    image_data: str = Field(..., description="Base64 encoded image bytes")
    file_name: str
    content_type: str
    uploaded_at: datetime
    display_order: int
    is_priority: bool

    @classmethod
    def from_dto(cls, image) -> "ProfileImageResponse":
        return cls(
            id=image.id,
            profile_id=image.profile_id,
            image_data=base64.b64encode(image.image_data).decode("ascii"),
            file_name=image.file_name,
            content_type=image.content_type,
            uploaded_at=image.uploaded_at,
            display_order=image.display_order,
            is_priority=image.is_priority,
        )

class UploadImagesRequest(BaseModel):
    base64_images: List[str] = Field(
        ...,
        min_length=1,
        max_length=settings.MAX_IMAGES_PER_REQUEST,
        description="Base64 encoded images, optionally as data URLs",
    )
    file_names: List[FileName] = Field(..., min_length=1, max_length=settings.MAX_IMAGES_PER_REQUEST)

    @model_validator(mode='after')
    def validate_pairing(self):
        if len(self.base64_images) != len(self.file_names):
            raise ValueError('File names must match the number of images')
        return self

class UploadImagesResponse(BaseModel):
    success: bool
    message: str
    images_uploaded: int
    remaining_slots: int
    images: List[ProfileImageResponse] = []
    evicted_image_ids: List[int] = []

class ImageCountResponse(BaseModel):
    count: int
    max_allowed: int
    remaining_slots: int

class PriorityUpdateRequest(BaseModel):
    is_priority: bool

class PriorityUpdateResponse(BaseModel):
    message: str
    is_priority: bool
