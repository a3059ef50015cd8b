from app.middleware.performance import PerformanceMiddleware
from app.middleware.request_id import RequestIdMiddleware

__all__ = ["PerformanceMiddleware", "RequestIdMiddleware"]
