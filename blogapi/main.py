"""
Blog Service

Multi-user blog post API: users register, log in for a bearer token, and
manage the posts they own.
"""
import os
from fastapi import FastAPI

from blogapi.shared.cors import setup_cors
from blogapi.shared.database import check_db_connection, init_db
from blogapi.shared.errors import register_error_handlers
from blogapi.shared.auth import get_token_secret
from blogapi.shared.request_logging import setup_logging, setup_request_logging
from blogapi.shared.security_headers import setup_security_headers
from blogapi.posts.api import router as posts_router
from blogapi.users.api import router as users_router

setup_logging(os.getenv("LOG_LEVEL", "INFO"))

# Fail fast on a missing production SECRET
get_token_secret()

# Create tables
init_db()

app = FastAPI(
    title="Blog Service",
    version="1.0.0",
    description="Blog posts with token authentication and per-post ownership",
)

# Setup CORS from shared configuration
setup_cors(app)
setup_security_headers(app)
setup_request_logging(app)
register_error_handlers(app)


@app.get("/health")
def health():
    """Health check endpoint - returns service status"""
    db_connected = check_db_connection()
    return {
        "status": "ok" if db_connected else "degraded",
        "service": "blog",
        "database": "connected" if db_connected else "disconnected",
    }


app.include_router(users_router)
app.include_router(posts_router)
