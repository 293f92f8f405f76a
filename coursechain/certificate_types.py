"""Value types and errors shared by the certificate contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class CertificateErrorCode(IntEnum):
    """Error codes reported by the certificate contract."""

    ALREADY_INITIALIZED = 1
    CERTIFICATE_ALREADY_EXISTS = 2
    CERTIFICATE_NOT_FOUND = 3
    NOT_INITIALIZED = 4
    UNAUTHORIZED = 5
    NOT_INSTRUCTOR = 6
    INVALID_TOKEN_ID = 7
    INVALID_METADATA = 8
    CERTIFICATE_REVOKED = 9
    TRANSFER_NOT_ALLOWED = 10
    ROLE_NOT_FOUND = 11
    CERTIFICATE_EXPIRED = 12


class CertificateError(Exception):
    """A certificate contract call failed."""

    def __init__(self, code: CertificateErrorCode) -> None:
        super().__init__(code.name)
        self.code = code


class CertificateStatus(Enum):
    """Whether a certificate is still in force."""

    ACTIVE = "active"
    REVOKED = "revoked"


class Permission(Enum):
    """Actions a role may allow."""

    ISSUE = "issue"
    REVOKE = "revoke"


@dataclass(frozen=True)
class Role:
    """The permissions granted to a user."""

    can_issue: bool
    can_revoke: bool

    def has(self, permission: Permission) -> bool:
        """Return whether this role grants the permission."""
        if permission is Permission.ISSUE:
            return self.can_issue
        if permission is Permission.REVOKE:
            return self.can_revoke
        raise ValueError(f"unknown permission: {permission!r}")


@dataclass(frozen=True)
class CertificateMetadata:
    """Everything recorded about an issued certificate.

    An expiry_date of 0 means the certificate never expires.
    """

    course_id: str
    student_id: str
    instructor_id: str
    issue_date: int
    metadata_uri: str
    token_id: bytes
    title: str
    description: str
    status: CertificateStatus
    expiry_date: int