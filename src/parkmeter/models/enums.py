"""
Enums for domain models.
Enums provide type safety and clarity. Validation for categorical fields.
"""

import enum


class SessionStatus(str, enum.Enum):
    """Parking session lifecycle states.

    ACTIVE -> EXPIRED happens lazily when a read finds the window elapsed.
    FINED is terminal and can be reached from any state.
    """

    ACTIVE = "active"
    EXPIRED = "expired"
    FINED = "fined"
