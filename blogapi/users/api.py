"""
Users API

Registration, user listing and login.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from blogapi.shared.auth import get_token_lifetime, get_token_secret
from blogapi.shared.database import get_db
from blogapi.users.login import Authenticator
from blogapi.users.schemas import LoginRequest, LoginResponse, UserCreate, UserResponse
from blogapi.users.store import CredentialStore

router = APIRouter(tags=["users"])


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_authenticator(
    store: CredentialStore = Depends(get_credential_store),
    secret: str = Depends(get_token_secret),
) -> Authenticator:
    return Authenticator(store, secret, get_token_lifetime())


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, authenticator: Authenticator = Depends(get_authenticator)):
    """Exchange username and password for a bearer token."""
    return authenticator.authenticate(credentials.username, credentials.password)


@router.get("/users", response_model=list[UserResponse])
def list_users(store: CredentialStore = Depends(get_credential_store)):
    """List all users with the posts they own."""
    return store.list_users()


@router.post("/users", response_model=UserResponse, status_code=201)
def register(user_data: UserCreate, store: CredentialStore = Depends(get_credential_store)):
    """Register a new user."""
    return store.create(user_data.username, user_data.password, name=user_data.name)
