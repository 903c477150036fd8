"""Route service and CLI built on the postman solver."""

from .route_service import PostmanService, RouteResult, RouteStep

__all__ = ["PostmanService", "RouteResult", "RouteStep"]
