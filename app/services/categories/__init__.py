from app.services.categories.categories_service import CategoriesService, categories_service

__all__ = ["CategoriesService", "categories_service"]
