"""Categories service: the user's labels"""

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Category, note_categories
from app.utils.logger import get_logger

logger = get_logger("categories")


class CategoriesService:
    async def list_categories(self, user_id: int, db: AsyncSession) -> list[Category]:
        result = await db.execute(
            select(Category).where(Category.user_id == user_id).order_by(Category.id)
        )
        return list(result.scalars().all())

    async def get_category(self, user_id: int, category_id: int, db: AsyncSession) -> Category:
        result = await db.execute(
            select(Category).where(Category.id == category_id, Category.user_id == user_id)
        )
        category = result.scalar_one_or_none()
        if not category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
        return category

    async def _ensure_name_free(self, user_id: int, name: str, db: AsyncSession) -> None:
        result = await db.execute(
            select(Category.id).where(Category.user_id == user_id, Category.name == name)
        )
        if result.first() is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category already exists")

    async def _commit_unique(self, db: AsyncSession) -> None:
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category already exists")

    async def create_category(self, user_id: int, name: str, db: AsyncSession) -> Category:
        name = name.strip()
        await self._ensure_name_free(user_id, name, db)

        category = Category(name=name, user_id=user_id)
        db.add(category)
        await self._commit_unique(db)
        await db.refresh(category)
        return category

    async def rename_category(
        self, user_id: int, category_id: int, name: str, db: AsyncSession
    ) -> Category:
        category = await self.get_category(user_id, category_id, db)
        name = name.strip()
        if name == category.name:
            return category

        await self._ensure_name_free(user_id, name, db)
        category.name = name
        await self._commit_unique(db)
        await db.refresh(category)
        return category

    async def delete_category(self, user_id: int, category_id: int, db: AsyncSession) -> None:
        """Delete a label; notes filed under it survive without it."""
        category = await self.get_category(user_id, category_id, db)
        await db.execute(
            delete(note_categories).where(note_categories.c.category_id == category.id)
        )
        await db.delete(category)
        await db.commit()
        logger.info(f"Deleted category {category_id} for user {user_id}")


# Global instance
categories_service = CategoriesService()
