from typing import Dict, List

from fastapi import APIRouter

from dependencies import CurrentUser, Posts
from models.post import Comment, CommentRequest, Like, Post, PostRequest

router = APIRouter()


@router.post("", response_model=Post)
def create_post(posts: Posts, post_data: PostRequest, current_user: CurrentUser) -> Post:
    """Create a new post"""
    return posts.create_post(current_user.user_id, post_data.text)


@router.get("", response_model=List[Post])
def get_posts(posts: Posts, current_user: CurrentUser) -> List[Post]:
    """Get all posts, newest first"""
    return posts.get_posts()


@router.put("/like/{post_id}", response_model=List[Like])
def like_post(posts: Posts, post_id: str, current_user: CurrentUser) -> List[Like]:
    return posts.like_post(post_id, current_user.user_id)


@router.put("/unlike/{post_id}", response_model=List[Like])
def unlike_post(posts: Posts, post_id: str, current_user: CurrentUser) -> List[Like]:
    return posts.unlike_post(post_id, current_user.user_id)


@router.post("/comment/{post_id}", response_model=Post)
def add_comment(
        posts: Posts,
        post_id: str,
        comment: CommentRequest,
        current_user: CurrentUser
) -> Post:
    """Add a comment to a post"""
    return posts.add_comment(post_id, current_user.user_id, comment.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[Comment])
def delete_comment(
        posts: Posts,
        post_id: str,
        comment_id: str,
        current_user: CurrentUser
) -> List[Comment]:
    """Delete one of your own comments"""
    return posts.delete_comment(post_id, comment_id, current_user.user_id)


@router.get("/{post_id}", response_model=Post)
def get_post(posts: Posts, post_id: str, current_user: CurrentUser) -> Post:
    return posts.get_post(post_id)


@router.delete("/{post_id}")
def delete_post(posts: Posts, post_id: str, current_user: CurrentUser) -> Dict[str, str]:
    """Delete a post you authored"""
    posts.delete_post(post_id, current_user.user_id)
    return {"msg": "Post removed"}
