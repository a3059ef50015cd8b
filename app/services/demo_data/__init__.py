"""Demo data seeding for guest and demo accounts."""

from app.services.demo_data.demo_data_service import (
    DemoDataService,
    demo_data_service,
    DEMO_CATEGORY_NAMES,
    DEMO_NOTES,
)

__all__ = ["DemoDataService", "demo_data_service", "DEMO_CATEGORY_NAMES", "DEMO_NOTES"]
