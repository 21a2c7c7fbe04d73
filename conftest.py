"""
Shared test fixtures.

Points the app at a private in-memory SQLite database before anything from
blogapi is imported, recreates the schema for every test, and seeds the
user `test` with two posts.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from blogapi.main import app
from blogapi.posts.models import Post
from blogapi.posts.repository import PostRepository
from blogapi.posts.service import PostService
from blogapi.shared.auth import SessionValidator, issue_token
from blogapi.shared.database import Base, SessionLocal, engine
from blogapi.users.store import CredentialStore

TEST_SECRET = "test-secret"
TEST_PASSWORD = "sekret"

INITIAL_POSTS = [
    {
        "title": "HTML is easy",
        "author": "Pekka",
        "url": "html://pekanblog.com",
        "likes": 6,
    },
    {
        "title": "Browser can execute only Javascript",
        "author": "Markku",
        "url": "html://markunblogi.com",
        "likes": 6,
    },
]


def posts_in_db() -> list[dict]:
    db = SessionLocal()
    try:
        return [
            {
                "id": post.id,
                "title": post.title,
                "author": post.author,
                "url": post.url,
                "likes": post.likes,
                "owner_id": post.owner_id,
            }
            for post in db.query(Post).order_by(Post.id).all()
        ]
    finally:
        db.close()


def create_user(username: str, password: str = TEST_PASSWORD, name: str = None) -> int:
    db = SessionLocal()
    try:
        return CredentialStore(db).create(username, password, name=name).id
    finally:
        db.close()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def user_id():
    return create_user("test", name="name")


@pytest.fixture
def seeded_posts(user_id):
    db = SessionLocal()
    try:
        for data in INITIAL_POSTS:
            db.add(Post(owner_id=user_id, **data))
        db.commit()
    finally:
        db.close()
    return posts_in_db()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token(client, user_id):
    response = client.post("/login", json={"username": "test", "password": TEST_PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def validator():
    return SessionValidator(TEST_SECRET)


@pytest.fixture
def service(db, validator):
    return PostService(PostRepository(db), CredentialStore(db), validator)


@pytest.fixture
def owner_token(user_id):
    return issue_token(user_id, "test", TEST_SECRET)
