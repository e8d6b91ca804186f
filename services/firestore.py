import logging
from typing import Any, Callable, Dict, List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.api_core.exceptions import InvalidArgument
from google.cloud import firestore
from google.cloud.firestore_v1 import DocumentReference, FieldFilter

logger = logging.getLogger(__name__)

# Receives the stored post and returns the fields to write back
PostMutation = Callable[[Dict[str, Any]], Dict[str, Any]]


def _to_dict(snapshot) -> Dict[str, Any]:
    data = snapshot.to_dict()
    data["id"] = snapshot.id
    return data


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    # ----- users -----

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user by ID, including the password hash"""
        ref = self._document("users", user_id)
        if ref is None:
            return None
        try:
            snapshot = ref.get()
        except InvalidArgument:
            return None
        if not snapshot.exists:
            return None
        return _to_dict(snapshot)

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get a user by (lower-cased) email"""
        docs = self.collection("users").where(
            filter=FieldFilter("email", "==", email.lower())
        ).limit(1).stream()
        for doc in docs:
            return _to_dict(doc)
        return None

    def create_user(self, name: str, email: str, password_hash: str, avatar: str, date: str) -> Dict[str, Any]:
        """Create a new user and return it with its generated ID"""
        user_ref = self.collection("users").document()
        user_data = {
            "name": name,
            "email": email.lower(),
            "password": password_hash,
            "avatar": avatar,
            "date": date,
        }
        user_ref.set(user_data)
        return {"id": user_ref.id, **user_data}

    # ----- posts -----

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection("posts").order_by("date", direction=firestore.Query.DESCENDING).stream()
        return [_to_dict(doc) for doc in posts_ref]

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID, None if it does not exist or the ID is malformed"""
        ref = self._document("posts", post_id)
        if ref is None:
            return None
        try:
            snapshot = ref.get()
        except InvalidArgument:
            return None
        if not snapshot.exists:
            return None
        return _to_dict(snapshot)

    def create_post(self, post_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new post and return it with its generated ID"""
        new_post_ref = self.collection("posts").document()
        new_post_ref.set(post_data)
        return {"id": new_post_ref.id, **post_data}

    def delete_post(self, post_id: str) -> None:
        self.collection("posts").document(post_id).delete()

    def update_post(self, post_id: str, mutate: PostMutation) -> Optional[Dict[str, Any]]:
        """
        Read, change and write back a post atomically

        Args:
            post_id: The post to update
            mutate: Called with the stored post inside the transaction; returns the fields to
                update. Any exception it raises aborts the transaction without writing.

        Returns:
            The updated post, or None if the post does not exist
        """
        post_ref = self._document("posts", post_id)
        if post_ref is None:
            return None
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None

            post_data = _to_dict(snapshot)
            changes = mutate(post_data)

            transaction.update(post_ref, changes)
            post_data.update(changes)
            return post_data

        try:
            return update_in_transaction(transaction, post_ref)
        except InvalidArgument:
            return None

    def _document(self, collection: str, doc_id: str) -> Optional[DocumentReference]:
        # IDs containing path separators or reserved names can't address a document
        try:
            return self.collection(collection).document(doc_id)
        except ValueError:
            logger.debug("Malformed %s id %r", collection, doc_id)
            return None
