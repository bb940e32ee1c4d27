"""
Lease Types

Enumerations shared by container and blob leases.

Author: Ayodele Oladeji
Date: 2025
"""

import uuid
from enum import Enum

# Azure issues lease identifiers as GUIDs
LeaseId = uuid.UUID


class LeaseStatus(str, Enum):
    """Lease status."""
    LOCKED = "locked"
    UNLOCKED = "unlocked"


class LeaseState(str, Enum):
    """Lease state."""
    AVAILABLE = "available"
    LEASED = "leased"
    EXPIRED = "expired"
    BREAKING = "breaking"
    BROKEN = "broken"


class LeaseDuration(str, Enum):
    """Lease duration kind as reported by the service."""
    INFINITE = "infinite"
    FIXED = "fixed"


class LeaseAction(str, Enum):
    """Value of the x-ms-lease-action request header."""
    ACQUIRE = "acquire"
    RENEW = "renew"
    RELEASE = "release"
    BREAK = "break"
    CHANGE = "change"
