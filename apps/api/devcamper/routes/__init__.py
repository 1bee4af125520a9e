"""Route modules."""

from .bootcamps import router as bootcamps_router
from .courses import router as courses_router
from .health import router as health_router
from .reviews import router as reviews_router
from .users import router as users_router

__all__ = ["bootcamps_router", "courses_router", "health_router", "reviews_router", "users_router"]
