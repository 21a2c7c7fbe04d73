"""Sentralisert CORS-konfigurasjon for blogg-API-et."""

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


# Development origins (kun i dev-miljø)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


def get_allowed_origins() -> list[str]:
    """Hent liste over tillatte CORS origins basert på miljø."""
    origins = []

    # Frontend-URL fra env hvis satt
    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url:
        origins.append(frontend_url.rstrip("/"))

    # Legg til dev-origins hvis ikke i produksjon
    env = os.getenv("ENVIRONMENT", "development")
    if env != "production":
        origins.extend(o for o in DEV_ORIGINS if o not in origins)

    return origins


def setup_cors(app: FastAPI) -> None:
    """Legg til CORS-middleware på en FastAPI-app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        # Authorization must be allowed for bearer tokens from the browser
        allow_headers=["*"],
    )
