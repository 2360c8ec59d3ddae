from blogapp.routes.blogs import router as blogs_router
from blogapp.routes.comments import router as comments_router
from blogapp.routes.upload import router as upload_router
from blogapp.routes.users import router as users_router

__all__ = [
    "blogs_router",
    "comments_router",
    "upload_router",
    "users_router",
]
