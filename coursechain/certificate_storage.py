"""Key-value storage backing the certificate contract."""

from __future__ import annotations

from coursechain.certificate_types import CertificateMetadata, Role


class CertificateStorage:
    """Admin, roles, certificates and per-user certificate lists.

    Lists handed out are copies, so changing them never alters what is
    stored until they are written back.
    """

    def __init__(self) -> None:
        self._admin: str | None = None
        self._initialized = False
        self._roles: dict[str, Role] = {}
        self._certificates: dict[bytes, CertificateMetadata] = {}
        self._user_certificates: dict[str, list[bytes]] = {}

    def set_admin(self, admin: str) -> None:
        """Set the contract admin."""
        self._admin = admin

    def get_admin(self) -> str:
        """Return the admin; raise LookupError if none has been set."""
        if self._admin is None:
            raise LookupError("no admin has been set")
        return self._admin

    def set_initialized(self) -> None:
        """Mark the contract as initialized."""
        self._initialized = True

    def is_initialized(self) -> bool:
        """Return whether the contract has been initialized."""
        return self._initialized

    def set_role(self, user: str, role: Role) -> None:
        """Store the role of a user, replacing any earlier one."""
        self._roles[user] = role

    def get_role(self, user: str) -> Role | None:
        """Return the role of a user, or None if it has none."""
        return self._roles.get(user)

    def remove_role(self, user: str) -> None:
        """Remove the role of a user if there is one."""
        self._roles.pop(user, None)

    def set_certificate(
        self, certificate_id: bytes, metadata: CertificateMetadata
    ) -> None:
        """Store the metadata of a certificate."""
        self._certificates[bytes(certificate_id)] = metadata

    def get_certificate(self, certificate_id: bytes) -> CertificateMetadata | None:
        """Return a certificate's metadata, or None if it does not exist."""
        return self._certificates.get(bytes(certificate_id))

    def has_certificate(self, certificate_id: bytes) -> bool:
        """Return whether a certificate exists."""
        return bytes(certificate_id) in self._certificates

    def get_user_certificates(self, user: str) -> list[bytes]:
        """Return the ids of the certificates a user holds, in order added."""
        return list(self._user_certificates.get(user, ()))

    def set_user_certificates(self, user: str, certificate_ids) -> None:
        """Replace the list of certificates a user holds."""
        self._user_certificates[user] = [bytes(c) for c in certificate_ids]

    def add_user_certificate(self, user: str, certificate_id: bytes) -> None:
        """Append a certificate to a user's list unless already present."""
        certificates = self.get_user_certificates(user)
        certificate_id = bytes(certificate_id)
        if certificate_id in certificates:
            return
        certificates.append(certificate_id)
        self.set_user_certificates(user, certificates)

    def remove_user_certificate(self, user: str, certificate_id: bytes) -> None:
        """Remove a certificate from a user's list if it is there."""
        certificates = self.get_user_certificates(user)
        try:
            certificates.remove(bytes(certificate_id))
        except ValueError:
            return
        self.set_user_certificates(user, certificates)