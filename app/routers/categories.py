"""Categories router for the user's labels"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.models import User
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import MessageResponse
from app.services.auth import get_current_user
from app.services.categories import categories_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a label. Names are unique per user."""
    return await categories_service.create_category(user.id, body.name, db)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await categories_service.list_categories(user.id, db)


@router.put("/{category_id}", response_model=CategoryResponse)
async def rename_category(
    category_id: int,
    body: CategoryUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await categories_service.rename_category(user.id, category_id, body.name, db)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a label. Notes filed under it are kept."""
    await categories_service.delete_category(user.id, category_id, db)
    return MessageResponse(message="Category deleted")
