from .base import Base, BaseDbModel
from .db import Category, Comment, Like, Post, PostCategory, Reaction, Target, TargetType, User, UserSession


__all__ = [
    "Base",
    "BaseDbModel",
    "Category",
    "Comment",
    "Like",
    "Post",
    "PostCategory",
    "Reaction",
    "Target",
    "TargetType",
    "User",
    "UserSession",
]
