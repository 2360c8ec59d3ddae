"""Database models for the application."""

from blogapp.models.blog import BlogDB
from blogapp.models.comment import CommentDB
from blogapp.models.user import UserDB

__all__ = ["UserDB", "BlogDB", "CommentDB"]
