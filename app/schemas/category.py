"""Category (label) schemas"""

from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CategoryCreate(BaseModel):
    """Category creation request"""
    name: str = Field(..., min_length=1, max_length=100)


class CategoryUpdate(BaseModel):
    """Category rename request"""
    name: str = Field(..., min_length=1, max_length=100)


class CategoryBrief(BaseModel):
    """Category as embedded in a note"""
    id: int
    name: str

    class Config:
        from_attributes = True


class CategoryResponse(BaseModel):
    """Category response"""
    id: int
    name: str
    user_id: int
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
