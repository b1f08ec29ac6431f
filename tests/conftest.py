"""Test configuration and fixtures."""

import os

# Settings are read when the app and containers are built, so these must be
# in place before any test module imports flow.interface.api.app
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")

from datetime import datetime, timezone  # noqa: E402
from uuid import uuid4  # noqa: E402

from flow.domain.model import Service, Target, User  # noqa: E402
from flow.domain.value import (  # noqa: E402
    Email,
    ServiceId,
    TargetId,
    TargetStatus,
    TargetType,
    UserId,
    Username,
)


def make_user(username: str = "alice", **overrides) -> User:
    """Build a user with sensible defaults for repository seeding."""
    now = datetime.now(timezone.utc)
    fields = {
        "id": UserId(uuid4()),
        "username": Username(username),
        "email": Email(f"{username}@example.com"),
        "fullname": username.capitalize(),
        "password_hash": "not-a-real-hash",
        "refresh_token": None,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return User(**fields)


def make_service(name: str = "Acme", **overrides) -> Service:
    """Build a service with sensible defaults for repository seeding."""
    now = datetime.now(timezone.utc)
    fields = {
        "id": ServiceId(uuid4()),
        "name": name,
        "email": Email(f"{name.lower()}@example.com"),
        "description": f"{name} does things",
        "service_link": None,
        "logo_url": None,
        "password_hash": "not-a-real-hash",
        "upvotes": 0,
        "refresh_token": None,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Service(**fields)


def make_target(
    target_type: TargetType,
    service_id: ServiceId,
    opened_by: UserId,
    title: str = "Something",
    **overrides,
) -> Target:
    """Build a feedback, issue or bug with zeroed counters."""
    now = datetime.now(timezone.utc)
    fields = {
        "id": TargetId(uuid4()),
        "target_type": target_type,
        "service_id": service_id,
        "opened_by": opened_by,
        "title": title,
        "description": f"{title} description",
        "status": TargetStatus.OPEN if target_type.has_status else None,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Target(**fields)
