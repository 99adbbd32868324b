"""
Account audit trail.

Registrations and logins leave an AuditLog row. Entries are only staged
here; they reach the database with the caller's commit, so a registration
that loses the email race leaves no trace.
"""

import json

from sqlalchemy.ext.asyncio import AsyncSession

from shortlist_api.models import AuditLog


async def log_action(
    db: AsyncSession,
    action: str,
    user_email: str,
    details: dict | str | None = None
):
    """
    Stage an audit entry on the session without committing.

    Args:
        db: Session whose next commit persists the entry
        action: "user_registered" or "user_logged_in"
        user_email: Account the action belongs to
        details: Extra context; dicts are stored as JSON text
    """
    if isinstance(details, dict):
        details = json.dumps(details, sort_keys=True)

    db.add(AuditLog(action=action, user_email=user_email, details=details or None))
