"""Strongly typed identifiers for Service Flow domain entities.

Principal ids (users and services) are uuid4 values generated by the
application, so the two principal kinds never share an id.
"""

from typing import NewType
from uuid import UUID

# Principals
UserId = NewType("UserId", UUID)
ServiceId = NewType("ServiceId", UUID)

# Content
TargetId = NewType("TargetId", UUID)
CommentId = NewType("CommentId", UUID)

# Ledgers
VoteId = NewType("VoteId", UUID)
ServiceVoteId = NewType("ServiceVoteId", UUID)
LikeId = NewType("LikeId", UUID)
