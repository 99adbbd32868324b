"""
Shortlist API Package

A JSON API for account registration and login, per-user post shortlists,
and post listing/creation. The package is organized as follows:

- config.py: Application configuration and environment settings
- database.py: Database connection and session management
- dependencies.py: The bearer-token gate for authenticated routes
- errors.py: Error types and the JSON error envelope
- limiter.py: Rate limiting configuration
- main.py: FastAPI application entry point
- models.py: SQLAlchemy ORM database models
- schemas.py: Pydantic request/response models

Subpackages:
- routes/: API route handlers (auth, users, posts)
- services/: Tokens and passwords, shortlist storage, audit log
"""
