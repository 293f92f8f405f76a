"""Storage and authorisation helpers of the batch certificate contract."""

from __future__ import annotations

import dataclasses

from coursechain.batch_types import BatchError, BatchErrorCode, CertificateData
from coursechain.env import Env

_DEFAULT_MAX_BATCH_SIZE = 10
_MAX_BATCH_SIZE_KEY = "MAX_BS"


class BatchStorage:
    """Admin, configuration, issuers, certificates and their owners.

    Every operation other than initialisation raises
    BatchError(NOT_INITIALIZED) until the storage has been initialised.
    """

    def __init__(self, env: Env) -> None:
        self.env = env
        self._initialized = False
        self._admin: str | None = None
        self._config: dict[str, int] | None = None
        self._issuers: list[str] | None = None
        self._certificates: dict[int, CertificateData] = {}
        self._owners: dict[str, list[int]] = {}

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise BatchError(BatchErrorCode.NOT_INITIALIZED)

    def initialize(self, admin: str, max_batch_size: int) -> None:
        """Set the admin and the largest batch allowed; may be done once only."""
        if self._initialized:
            raise BatchError(BatchErrorCode.ALREADY_INITIALIZED)
        self._admin = admin
        self._config = {_MAX_BATCH_SIZE_KEY: max_batch_size}
        self._initialized = True

    def is_initialized(self) -> bool:
        """Return whether the storage has been initialised."""
        return self._initialized

    def get_admin(self) -> str:
        """Return the admin address."""
        if self._admin is None:
            raise BatchError(BatchErrorCode.NOT_INITIALIZED)
        return self._admin

    def get_max_batch_size(self) -> int:
        """Return the largest number of certificates a batch may hold."""
        if self._config is None:
            raise BatchError(BatchErrorCode.NOT_INITIALIZED)
        return self._config.get(_MAX_BATCH_SIZE_KEY, _DEFAULT_MAX_BATCH_SIZE)

    def is_issuer(self, address: str) -> bool:
        """Return whether the address may issue certificates."""
        self._require_initialized()
        return self._issuers is not None and address in self._issuers

    def add_issuer(self, address: str) -> None:
        """Allow an address to issue certificates."""
        self._require_initialized()
        issuers = list(self._issuers or ())
        if address not in issuers:
            issuers.append(address)
            self._issuers = issuers

    def remove_issuer(self, address: str) -> None:
        """Stop an address from issuing certificates."""
        self._require_initialized()
        if self._issuers is not None and address in self._issuers:
            issuers = list(self._issuers)
            issuers.remove(address)
            self._issuers = issuers

    def certificate_exists(self, certificate_id: int) -> bool:
        """Return whether a certificate with this id has been saved."""
        self._require_initialized()
        return certificate_id in self._certificates

    def save_certificate(self, owner: str, certificate: CertificateData) -> None:
        """Store a new certificate and record its owner."""
        self._require_initialized()
        if self.certificate_exists(certificate.id):
            raise BatchError(BatchErrorCode.DUPLICATE_CERTIFICATE)
        self._certificates[certificate.id] = certificate
        owned = self.get_owner_certificates(owner)
        owned.append(certificate.id)
        self._owners[owner] = owned

    def get_certificate(self, certificate_id: int) -> CertificateData | None:
        """Return a certificate, or None if there is none with this id."""
        self._require_initialized()
        return self._certificates.get(certificate_id)

    def get_owner_certificates(self, owner: str) -> list[int]:
        """Return the ids of the certificates an address owns, in order saved."""
        self._require_initialized()
        return list(self._owners.get(owner, ()))

    def revoke_certificate(self, certificate_id: int) -> None:
        """End a revocable certificate's validity at the current ledger time."""
        self._require_initialized()
        certificate = self._certificates.get(certificate_id)
        if certificate is None:
            raise BatchError(BatchErrorCode.CERTIFICATE_NOT_FOUND)
        if not certificate.revocable:
            raise BatchError(BatchErrorCode.CERTIFICATE_NOT_REVOCABLE)
        self._certificates[certificate_id] = dataclasses.replace(
            certificate, valid_until=self.env.timestamp
        )


def is_admin(storage: BatchStorage, address: str) -> bool:
    """Return whether the address is the admin."""
    if not storage.is_initialized():
        raise BatchError(BatchErrorCode.NOT_INITIALIZED)
    return storage.get_admin() == address


def is_issuer(storage: BatchStorage, address: str) -> bool:
    """Return whether the address may issue certificates."""
    if not storage.is_initialized():
        raise BatchError(BatchErrorCode.NOT_INITIALIZED)
    return storage.is_issuer(address)


def add_issuer(storage: BatchStorage, admin: str, issuer: str) -> None:
    """Allow an issuer, on behalf of the admin."""
    if not is_admin(storage, admin):
        raise BatchError(BatchErrorCode.UNAUTHORIZED)
    storage.add_issuer(issuer)


def remove_issuer(storage: BatchStorage, admin: str, issuer: str) -> None:
    """Disallow an issuer, on behalf of the admin."""
    if not is_admin(storage, admin):
        raise BatchError(BatchErrorCode.UNAUTHORIZED)
    storage.remove_issuer(issuer)