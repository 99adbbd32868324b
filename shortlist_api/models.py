"""
Database Models for the Shortlist API

This module defines the SQLAlchemy ORM models for the application:
- User: Registered accounts that can log in and keep a shortlist
- Post: Listable content records
- Shortlist: Association between a user and a post they saved
- AuditLog: Record of registrations and logins

The Shortlist association is a full ORM class rather than a bare Table
because each entry carries its own creation time, which drives list ordering.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship


# Base class for all ORM models
# All models must inherit from Base to be recognized by SQLAlchemy
Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    """
    Registered account.

    Emails are stored lower-cased so the unique index also enforces
    case-insensitive uniqueness.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # unique=True prevents duplicate accounts, even under concurrent registration
    email = Column(String(255), unique=True, index=True, nullable=False)

    # argon2id hash in PHC string format, never the plain password
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    # One-to-many: the user's shortlist entries
    # cascade="all, delete-orphan": deleting a user removes their entries
    shortlist_entries = relationship(
        "Shortlist",
        back_populates="user",
        cascade="all, delete-orphan"
    )


class Post(Base):
    """Content record listed by GET /v1/posts."""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    shortlist_entries = relationship(
        "Shortlist",
        back_populates="post",
        cascade="all, delete-orphan"
    )


class Shortlist(Base):
    """
    A post saved by a user.

    At most one row exists per (user_id, post_id): the unique constraint is
    what keeps concurrent duplicate adds from storing two entries.
    The surrogate id increases with insertion order and is used to list
    a shortlist most-recently-added first.
    """
    __tablename__ = "shortlists"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_shortlists_user_post"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="shortlist_entries")
    post = relationship("Post", back_populates="shortlist_entries")


class AuditLog(Base):
    """
    Model for audit logs.

    Records registrations and logins for security monitoring.
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String, index=True)  # e.g., "user_registered", "user_logged_in"
    user_email = Column(String, index=True)  # Email of the actor
    details = Column(String, nullable=True)  # JSON or text description
    created_at = Column(DateTime(timezone=True), default=utcnow)
