from blogapp.repositories.base import BaseRepository
from blogapp.repositories.blog import BlogFilters, BlogRepository, BlogStats, build_filter_conditions
from blogapp.repositories.comment import CommentRepository
from blogapp.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BlogFilters",
    "BlogRepository",
    "BlogStats",
    "build_filter_conditions",
    "CommentRepository",
    "UserRepository",
]
