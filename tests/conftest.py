"""
Shared pytest fixtures.

The API is exercised through FastAPI's TestClient with the Firestore and token
dependencies overridden. InMemoryFirestore mirrors the storage methods of
services.firestore.FirestoreDB, including the update_post contract: the
mutation runs against a copy and nothing is written if it raises.
"""

import copy
import os
import uuid
from typing import Any, Callable, Dict, List, Optional

import bcrypt
import pytest

os.environ.setdefault("JWT_SECRET", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402

from dependencies import get_firestore, get_token_service  # noqa: E402
from main import app  # noqa: E402
from services.tokens import TokenService  # noqa: E402

TEST_SECRET = "test-secret"


class InMemoryFirestore:
    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.posts: Dict[str, Dict[str, Any]] = {}

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        user = self.users.get(user_id)
        return {"id": user_id, **copy.deepcopy(user)} if user else None

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        for user_id, user in self.users.items():
            if user["email"] == email.lower():
                return {"id": user_id, **copy.deepcopy(user)}
        return None

    def create_user(self, name: str, email: str, password_hash: str, avatar: str, date: str) -> Dict[str, Any]:
        user_id = uuid.uuid4().hex
        self.users[user_id] = {
            "name": name,
            "email": email.lower(),
            "password": password_hash,
            "avatar": avatar,
            "date": date,
        }
        return self.get_user(user_id)

    def get_all_posts(self) -> List[Dict[str, Any]]:
        ordered = sorted(self.posts.items(), key=lambda item: item[1]["date"], reverse=True)
        return [{"id": post_id, **copy.deepcopy(post)} for post_id, post in ordered]

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        post = self.posts.get(post_id)
        return {"id": post_id, **copy.deepcopy(post)} if post else None

    def create_post(self, post_data: Dict[str, Any]) -> Dict[str, Any]:
        post_id = uuid.uuid4().hex
        self.posts[post_id] = copy.deepcopy(post_data)
        return self.get_post(post_id)

    def delete_post(self, post_id: str) -> None:
        self.posts.pop(post_id, None)

    def update_post(self, post_id: str, mutate: Callable) -> Optional[Dict[str, Any]]:
        post = self.get_post(post_id)
        if post is None:
            return None
        changes = mutate(post)
        self.posts[post_id].update(copy.deepcopy(changes))
        return self.get_post(post_id)

    # seeding helpers

    def add_user(self, name: str, email: str, password: str, user_id: Optional[str] = None) -> str:
        user_id = user_id or uuid.uuid4().hex
        self.users[user_id] = {
            "name": name,
            "email": email.lower(),
            "password": bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode(),
            "avatar": f"https://avatars.test/{user_id}",
            "date": "2024-01-01T00:00:00+00:00",
        }
        return user_id

    def add_post(self, user_id: str, text: str, date: str, post_id: Optional[str] = None, **fields) -> str:
        post_id = post_id or uuid.uuid4().hex
        self.posts[post_id] = {
            "user": user_id,
            "text": text,
            "name": self.users.get(user_id, {}).get("name"),
            "avatar": None,
            "date": date,
            "likes": [],
            "comments": [],
            **fields,
        }
        return post_id


@pytest.fixture
def db() -> InMemoryFirestore:
    return InMemoryFirestore()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=TEST_SECRET, expires_in=360000)


@pytest.fixture
def client(db, tokens):
    app.dependency_overrides[get_firestore] = lambda: db
    app.dependency_overrides[get_token_service] = lambda: tokens
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def alice(db, tokens) -> Dict[str, str]:
    user_id = db.add_user("Alice", "alice@mail.com", "secret-a")
    return {"id": user_id, "headers": {"x-auth-token": tokens.sign(user_id)}}


@pytest.fixture
def bob(db, tokens) -> Dict[str, str]:
    user_id = db.add_user("Bob", "bob@mail.com", "secret-b")
    return {"id": user_id, "headers": {"x-auth-token": tokens.sign(user_id)}}
