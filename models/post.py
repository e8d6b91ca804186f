from typing import Annotated, List, Optional

from pydantic import BaseModel, StringConstraints

PostText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: str


class Post(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: str
    likes: List[Like] = []
    comments: List[Comment] = []


class PostRequest(BaseModel):
    text: PostText


class CommentRequest(BaseModel):
    text: PostText
