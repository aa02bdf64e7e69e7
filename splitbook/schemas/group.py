from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class GroupCreate(BaseModel):
    """Schema for creating a group"""
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    created_by: str = Field(..., min_length=1)


class GroupUpdate(BaseModel):
    """Schema for renaming or re-describing a group"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class GroupAddMember(BaseModel):
    user_id: str = Field(..., min_length=1)


class ParticipantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None


class ParticipantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
