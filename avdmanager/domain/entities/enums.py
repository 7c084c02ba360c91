"""Enumerations shared by the template domain."""

from enum import Enum


class TemplateStatus(str, Enum):
    """Lifecycle states of a template."""

    DRAFT = "DRAFT"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    DEPLOYED = "DEPLOYED"
    DEPRECATED = "DEPRECATED"


class Environment(str, Enum):
    PILOT = "PILOT"
    DEVELOPMENT = "DEVELOPMENT"
    STAGING = "STAGING"
    PRODUCTION = "PRODUCTION"


class HostPoolType(str, Enum):
    POOLED = "POOLED"
    PERSONAL = "PERSONAL"


class LoadBalancerType(str, Enum):
    BREADTH_FIRST = "BREADTH_FIRST"
    DEPTH_FIRST = "DEPTH_FIRST"


class AppApprovalStatus(str, Enum):
    """Approval state of an application attached to a template."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


class TemplateHistoryAction(str, Enum):
    """Closed vocabulary of change ledger actions."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    STATUS_CHANGED = "STATUS_CHANGED"
    APP_ADDED = "APP_ADDED"
    APP_REMOVED = "APP_REMOVED"


__all__ = [
    "AppApprovalStatus",
    "Environment",
    "HostPoolType",
    "LoadBalancerType",
    "TemplateHistoryAction",
    "TemplateStatus",
]
