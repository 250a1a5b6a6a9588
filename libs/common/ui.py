"""Presentation outcomes shared by every portal component.

Components never render; they return what the page should do next: show a
toast, show an inline error, and/or navigate somewhere.
"""

import enum
from typing import Optional

from pydantic import BaseModel


class ToastLevel(str, enum.Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class Toast(BaseModel):
    level: ToastLevel
    message: str

    @classmethod
    def success(cls, message: str) -> "Toast":
        return cls(level=ToastLevel.SUCCESS, message=message)

    @classmethod
    def info(cls, message: str) -> "Toast":
        return cls(level=ToastLevel.INFO, message=message)

    @classmethod
    def error(cls, message: str) -> "Toast":
        return cls(level=ToastLevel.ERROR, message=message)


class Navigation(BaseModel):
    path: str
    delay_seconds: float = 0.0


class BadgeVariant(str, enum.Enum):
    DEFAULT = "default"
    SECONDARY = "secondary"
    OUTLINE = "outline"
    DESTRUCTIVE = "destructive"
    SUCCESS = "success"
    WARNING = "warning"


class Badge(BaseModel):
    label: str
    variant: BadgeVariant


class Outcome(BaseModel):
    """Result of a user action."""

    ok: bool
    toast: Optional[Toast] = None
    error: Optional[str] = None
    navigate: Optional[Navigation] = None


# Route prefixes of the three portals.
PROVIDER_SLUG = "org"
CONSUMER_SLUG = "user"
MODERATOR_SLUG = "admin"
