"""Enumerations shared by the CRM models and schemas."""

from enum import Enum


class UserRole(str, Enum):
    """Roles a CRM user can take."""

    ADMIN = "ADMIN"
    CLOSER = "CLOSER"


class CampaignStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class AppointmentStatus(str, Enum):
    """Outcome of a scheduled sales call. ``NO_SHOW*`` values are no-show subtypes."""

    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"
    NO_SHOW_FORGOT = "NO_SHOW_FORGOT"
    NO_SHOW_SICK = "NO_SHOW_SICK"
    NO_SHOW_GHOSTING = "NO_SHOW_GHOSTING"
    NO_SHOW_OTHER = "NO_SHOW_OTHER"


class DealStatus(str, Enum):
    """Deal pipeline state. ``LOST*`` values are loss subtypes."""

    PENDING = "PENDING"
    WON = "WON"
    LOST = "LOST"
    FOLLOW_UP = "FOLLOW_UP"
    LOST_TOO_EXPENSIVE = "LOST_TOO_EXPENSIVE"
    LOST_NO_NEED = "LOST_NO_NEED"
    LOST_COMPETITOR = "LOST_COMPETITOR"
    LOST_OTHER = "LOST_OTHER"


class PaymentType(str, Enum):
    FULL = "FULL"
    INSTALLMENTS = "INSTALLMENTS"
