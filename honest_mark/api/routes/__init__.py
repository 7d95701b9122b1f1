from __future__ import annotations

from honest_mark.api.routes.documents import router as documents_router
from honest_mark.api.routes.health import router as health_router

__all__ = ["documents_router", "health_router"]
