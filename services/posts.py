import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from errors import AuthorizationError, ConflictError, NotFoundError
from models.post import Comment, Like, Post
from services.firestore import FirestoreDB

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PostService:
    """
    Posts, likes and comments.
    Every mutation of an existing post goes through FirestoreDB.update_post so the
    check and the write happen in one transaction.
    """

    def __init__(self, db: FirestoreDB):
        self.db = db

    def _get_author(self, user_id: str) -> Dict[str, Any]:
        user = self.db.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_post(self, user_id: str, text: str) -> Post:
        """Create a post snapshotting the author's name and avatar"""
        user = self._get_author(user_id)

        post_data = {
            "user": user_id,
            "text": text,
            "name": user.get("name"),
            "avatar": user.get("avatar"),
            "date": _now(),
            "likes": [],
            "comments": [],
        }
        return Post(**self.db.create_post(post_data))

    def get_posts(self) -> List[Post]:
        """All posts, newest first"""
        return [Post(**post) for post in self.db.get_all_posts()]

    def get_post(self, post_id: str) -> Post:
        post = self.db.get_post(post_id)
        if not post:
            raise NotFoundError("Post not found")
        return Post(**post)

    def delete_post(self, post_id: str, user_id: str) -> None:
        self._get_author(user_id)
        post = self.db.get_post(post_id)
        if not post:
            raise NotFoundError("Post not found")

        if post.get("user") != user_id:
            logger.warning("User %s tried to delete post %s owned by %s", user_id, post_id, post.get("user"))
            raise AuthorizationError()

        self.db.delete_post(post_id)
        logger.info("Post %s removed by %s", post_id, user_id)

    def like_post(self, post_id: str, user_id: str) -> List[Like]:
        """Add the user's like to the front of the like list"""
        self._get_author(user_id)

        def add_like(post: Dict[str, Any]) -> Dict[str, Any]:
            likes = post.get("likes") or []
            if any(like.get("user") == user_id for like in likes):
                raise ConflictError("Post already liked")
            return {"likes": [{"user": user_id}] + likes}

        updated = self.db.update_post(post_id, add_like)
        if updated is None:
            raise NotFoundError("Post not found")
        return [Like(**like) for like in updated["likes"]]

    def unlike_post(self, post_id: str, user_id: str) -> List[Like]:
        """Remove the user's like from the like list"""
        self._get_author(user_id)

        def remove_like(post: Dict[str, Any]) -> Dict[str, Any]:
            likes = post.get("likes") or []
            if not any(like.get("user") == user_id for like in likes):
                raise ConflictError("Post has not yet been liked")
            return {"likes": [like for like in likes if like.get("user") != user_id]}

        updated = self.db.update_post(post_id, remove_like)
        if updated is None:
            raise NotFoundError("Post not found")
        return [Like(**like) for like in updated["likes"]]

    def add_comment(self, post_id: str, user_id: str, text: str) -> Post:
        """Prepend a comment to the post and return the whole post"""
        user = self._get_author(user_id)

        comment = {
            "id": uuid.uuid4().hex,
            "user": user_id,
            "text": text,
            "name": user.get("name"),
            "avatar": user.get("avatar"),
            "date": _now(),
        }

        def prepend_comment(post: Dict[str, Any]) -> Dict[str, Any]:
            return {"comments": [comment] + (post.get("comments") or [])}

        updated = self.db.update_post(post_id, prepend_comment)
        if updated is None:
            raise NotFoundError("Post not found")
        return Post(**updated)

    def delete_comment(self, post_id: str, comment_id: str, user_id: str) -> List[Comment]:
        """Remove one of the user's own comments and return the remaining comments"""
        self._get_author(user_id)

        def remove_comment(post: Dict[str, Any]) -> Dict[str, Any]:
            comments = post.get("comments") or []
            comment = next((c for c in comments if c.get("id") == comment_id), None)
            if comment is None:
                raise NotFoundError("Comment does not exist")
            if comment.get("user") != user_id:
                logger.warning("User %s tried to delete comment %s on post %s", user_id, comment_id, post_id)
                raise AuthorizationError()
            return {"comments": [c for c in comments if c.get("id") != comment_id]}

        updated = self.db.update_post(post_id, remove_comment)
        if updated is None:
            raise NotFoundError("Post not found")
        return [Comment(**comment) for comment in updated["comments"]]
