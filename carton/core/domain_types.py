"""Domain Types — identity types, column keys, and enums shared across the codebase.

Invariants:
    - ComponentId wraps the components table primary key, never a bare str in domain logic
    - Status and state are free-form tags owned by the provisioning engine (NewType, not Enum)
    - Pair keys used for derived lookups are constants here, never inline literals

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ComponentId = NewType("ComponentId", str)


# ─── Lifecycle Tags ──────────────────────────────────────────────

ComponentStatus = NewType("ComponentStatus", str)   # operational health/progress
ComponentState = NewType("ComponentState", str)     # provisioning lifecycle phase


# ─── Pair Keys ───────────────────────────────────────────────────

DOMAIN = "domain"
PROVIDER = "provider"
PUBLICIPV4 = "publicipv4"
ONECLICK = "oneclick"

STATUS_KEY = "status"
LAST_STATUS_UPDATE_KEY = "lastsuccessstatusupdate"

# Operation type the provisioner reads as a repo's continuous-integration
# hook; stored operation descriptors carry it verbatim in operation_type
CI_HOOK = "continuous-integration-hook"


# ─── Enums ───────────────────────────────────────────────────────

class BoxLevel(str, Enum):
    """Provisioning depth requested for a Box."""
    NONE = "none"
    SOME = "some"
    ALL = "all"


class ResolvePath(str, Enum):
    """Which branch the payload resolver took."""
    LOCAL = "local"
    REMOTE = "remote"
