import datetime

from forum_api.models import Reaction
from forum_api.schemas.base import Base, PageModel


class UserGet(Base):
    id: int
    username: str
    email: str
    created: datetime.datetime


class UserRegister(Base):
    username: str
    email: str
    password: str


class UserLogin(Base):
    email: str
    password: str


class CategoryGet(Base):
    id: int
    name: str
    slug: str
    description: str
    created: datetime.datetime


class CategoryPost(Base):
    name: str
    slug: str
    description: str = ""


class CategoryPatch(Base):
    name: str | None = None
    slug: str | None = None
    description: str | None = None


class LikeStats(Base):
    likes: int = 0
    dislikes: int = 0


class LikeGet(LikeStats):
    reaction: Reaction | None = None


class CommentGet(Base):
    id: int
    content: str
    post_id: int
    user_id: int
    username: str | None = None
    created: datetime.datetime
    updated: datetime.datetime
    like_count: int
    dislike_count: int


class CommentPost(Base):
    content: str


class CommentPatch(Base):
    content: str


class CommentGetAll(PageModel):
    comments: list[CommentGet] = []


class PostGet(Base):
    id: int
    title: str
    content: str
    user_id: int
    username: str | None = None
    created: datetime.datetime
    updated: datetime.datetime
    like_count: int
    dislike_count: int
    categories: list[CategoryGet] = []


class PostGetWithComments(PostGet):
    comments: list[CommentGet] = []
    reaction: Reaction | None = None


class PostPost(Base):
    title: str
    content: str
    category_ids: list[int] = []


class PostPatch(Base):
    title: str | None = None
    content: str | None = None
    category_ids: list[int] | None = None


class PostGetAll(PageModel):
    posts: list[PostGet] = []


class CategoryGetWithPosts(CategoryGet):
    posts: list[PostGet] = []
    limit: int
    offset: int
    total: int


class UserProfile(Base):
    user: UserGet
    posts: list[PostGet] = []
    liked_posts: list[PostGet] = []
    comments: list[CommentGet] = []
