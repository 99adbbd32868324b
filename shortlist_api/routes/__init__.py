"""
API Routes Package

Each module defines the routes for one area of the v1 API:

- auth.py: Registration and login
- users.py: The caller's post shortlist (bearer token required)
- posts.py: Post listing and creation

``api_router`` mounts all three under the /v1 prefix. It is assembled once
at import time and included by main.py.
"""

from fastapi import APIRouter

from shortlist_api.routes import auth, posts, users

api_router = APIRouter(prefix="/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(posts.router)
