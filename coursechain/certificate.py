"""Certificate contract: roles, minting, verification and revocation."""

from __future__ import annotations

import dataclasses

from coursechain.certificate_storage import CertificateStorage
from coursechain.certificate_types import (
    CertificateError,
    CertificateErrorCode,
    CertificateMetadata,
    CertificateStatus,
    Permission,
    Role,
)
from coursechain.env import Env

_ID_LENGTH = 32
_U64_LIMIT = 2**64


def _certificate_key(certificate_id: bytes) -> bytes:
    key = bytes(certificate_id)
    if len(key) != _ID_LENGTH:
        raise ValueError(f"certificate id must be {_ID_LENGTH} bytes, got {len(key)}")
    return key


class Certificate:
    """Issues course certificates to students on behalf of permitted issuers.

    An admin grants roles; holders of the issue permission mint
    certificates and holders of the revoke permission revoke them.
    Certificates with an expiry date of 0 never expire.
    """

    def __init__(self, env: Env) -> None:
        self.env = env
        self.storage = CertificateStorage()

    def _require_initialized(self) -> None:
        if not self.storage.is_initialized():
            raise CertificateError(CertificateErrorCode.NOT_INITIALIZED)

    def _require_admin_auth(self) -> None:
        self._require_initialized()
        self.env.require_auth(self.storage.get_admin())

    def initialize(self, admin: str) -> None:
        """Set the admin; may be done once only."""
        if self.storage.is_initialized():
            raise CertificateError(CertificateErrorCode.ALREADY_INITIALIZED)
        self.env.require_auth(admin)
        self.storage.set_admin(admin)
        self.storage.set_initialized()
        self.env.publish(("contract_initialized",), admin)

    def get_admin(self) -> str:
        """Return the admin address."""
        self._require_initialized()
        return self.storage.get_admin()

    def grant_role(self, user: str, role: Role) -> None:
        """Give a user a role; admin only."""
        self._require_admin_auth()
        self.storage.set_role(user, role)
        self.env.publish(("role_added", user), (role.can_issue, role.can_revoke))

    def update_role(self, user: str, new_role: Role) -> None:
        """Replace the role a user already has; admin only."""
        self._require_admin_auth()
        if self.storage.get_role(user) is None:
            raise CertificateError(CertificateErrorCode.ROLE_NOT_FOUND)
        self.storage.set_role(user, new_role)
        self.env.publish(
            ("role_updated", user), (new_role.can_issue, new_role.can_revoke)
        )

    def revoke_role(self, user: str) -> None:
        """Take away the role a user has; admin only."""
        self._require_admin_auth()
        if self.storage.get_role(user) is None:
            raise CertificateError(CertificateErrorCode.ROLE_NOT_FOUND)
        self.storage.remove_role(user)
        self.env.publish(("role_removed", user), ())

    def get_role(self, user: str) -> Role | None:
        """Return the user's role, or None if it has none."""
        return self.storage.get_role(user)

    def has_permission(self, user: str, permission: Permission) -> bool:
        """Return whether the user's role grants the permission."""
        role = self.storage.get_role(user)
        return role is not None and role.has(permission)

    def mint_certificate(
        self,
        issuer: str,
        certificate_id: bytes,
        course_id: str,
        student: str,
        title: str,
        description: str,
        metadata_uri: str,
        expiry_date: int,
    ) -> None:
        """Issue a new certificate to a student."""
        self._require_initialized()
        if not self.has_permission(issuer, Permission.ISSUE):
            raise CertificateError(CertificateErrorCode.UNAUTHORIZED)
        if not (title and description and metadata_uri and course_id):
            raise CertificateError(CertificateErrorCode.INVALID_METADATA)
        key = _certificate_key(certificate_id)
        if not 0 <= expiry_date < _U64_LIMIT:
            raise ValueError("expiry date is out of range")
        if self.storage.has_certificate(key):
            raise CertificateError(CertificateErrorCode.CERTIFICATE_ALREADY_EXISTS)

        metadata = CertificateMetadata(
            course_id=course_id,
            student_id=student,
            instructor_id=issuer,
            issue_date=self.env.timestamp,
            metadata_uri=metadata_uri,
            token_id=key,
            title=title,
            description=description,
            status=CertificateStatus.ACTIVE,
            expiry_date=expiry_date,
        )
        self.storage.set_certificate(key, metadata)
        self.storage.add_user_certificate(student, key)
        self.env.publish(
            ("nft_certificate_minted", key), (metadata, student, issuer, key)
        )

    def is_certificate_expired(self, certificate_id: bytes) -> bool:
        """Return whether a certificate has expired; unknown ones count as expired."""
        metadata = self.storage.get_certificate(_certificate_key(certificate_id))
        if metadata is None:
            return True
        if metadata.expiry_date == 0:
            return False
        return metadata.expiry_date < self.env.timestamp

    def verify_certificate(self, certificate_id: bytes) -> CertificateMetadata:
        """Return the metadata of a certificate that exists and is in force."""
        key = _certificate_key(certificate_id)
        metadata = self.storage.get_certificate(key)
        if metadata is None:
            raise CertificateError(CertificateErrorCode.CERTIFICATE_NOT_FOUND)
        if metadata.status is CertificateStatus.REVOKED:
            raise CertificateError(CertificateErrorCode.CERTIFICATE_REVOKED)
        if self.is_certificate_expired(key):
            raise CertificateError(CertificateErrorCode.CERTIFICATE_EXPIRED)
        return metadata

    def revoke_certificate(self, revoker: str, certificate_id: bytes) -> None:
        """Mark a certificate as revoked."""
        self._require_initialized()
        if not self.has_permission(revoker, Permission.REVOKE):
            raise CertificateError(CertificateErrorCode.UNAUTHORIZED)
        key = _certificate_key(certificate_id)
        metadata = self.storage.get_certificate(key)
        if metadata is None:
            raise CertificateError(CertificateErrorCode.CERTIFICATE_NOT_FOUND)
        metadata = dataclasses.replace(metadata, status=CertificateStatus.REVOKED)
        self.storage.set_certificate(key, metadata)
        self.env.publish(
            ("nft_certificate_revoked", key),
            (metadata, revoker, self.env.timestamp),
        )

    def track_certificates(self, user_address: str) -> list[bytes]:
        """Return the ids of the certificates a user holds."""
        return self.storage.get_user_certificates(user_address)

    def add_user_certificate(self, user_address: str, certificate_id: bytes) -> None:
        """Add an existing certificate to a user's list."""
        key = _certificate_key(certificate_id)
        if not self.storage.has_certificate(key):
            raise CertificateError(CertificateErrorCode.CERTIFICATE_NOT_FOUND)
        self.storage.add_user_certificate(user_address, key)