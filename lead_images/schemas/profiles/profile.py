# lead_images/schemas/profiles/profile.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime

class ProfileBase(BaseModel):
    profile_type: str = Field(..., min_length=1, max_length=50, description="Profile category, e.g. customer or lead")
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=100)

    @field_validator('profile_type', 'name', 'email')
    @classmethod
    def strip_whitespace(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Value cannot be blank')
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if '@' not in v:
            raise ValueError('Invalid email address')
        return v

class ProfileCreate(ProfileBase):
    pass

class ProfileUpdate(ProfileBase):
    pass

class ProfileResponse(ProfileBase):
    id: int
    created_at: datetime
