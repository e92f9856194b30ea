# Interview Roles
"""
The fixed set of roles an interview can target.

Both the API (wire codes) and the session client (display labels) use this.
"""

from enum import Enum


class Role(str, Enum):
    """Target role for an interview. Values are the wire codes."""
    AI_PM = "ai_pm"
    ENG_MANAGER = "eng_manager"
    DESIGNER = "designer"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "Role":
        for role, role_label in ROLE_LABELS.items():
            if role_label == label:
                return role
        raise ValueError(f"Unknown role label: {label}")


ROLE_LABELS = {
    Role.AI_PM: "AI Product Manager",
    Role.ENG_MANAGER: "Engineering Manager",
    Role.DESIGNER: "Product Designer",
}
