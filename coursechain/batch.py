"""Batch certificate contract: issuers mint, revoke and look up certificates."""

from __future__ import annotations

from typing import Callable, Sequence

from coursechain import batch_storage
from coursechain.batch_storage import BatchStorage
from coursechain.batch_types import (
    BatchError,
    BatchErrorCode,
    CertificateData,
    MintResult,
)
from coursechain.env import Env

CERTIFICATE_MINTED = "CERTIFICATE_MINTED"
CERTIFICATE_REVOKED = "CERTIFICATE_REVOKED"
BATCH_MINT_COMPLETED = "BATCH_MINT_COMPLETED"
ISSUER_ADDED = "ISSUER_ADDED"
ISSUER_REMOVED = "ISSUER_REMOVED"
CONTRACT_INITIALIZED = "CONTRACT_INITIALIZED"


class CertificateContract:
    """Mints certificates singly or in batches on behalf of approved issuers.

    The admin approves and removes issuers. A batch may hold at most the
    number of certificates set at initialisation; each certificate of a
    batch succeeds or fails on its own.
    """

    def __init__(self, env: Env) -> None:
        self.env = env
        self.storage = BatchStorage(env)

    def _authorize(
        self, address: str, check: Callable[[BatchStorage, str], bool]
    ) -> None:
        self.env.require_auth(address)
        if not check(self.storage, address):
            raise BatchError(BatchErrorCode.UNAUTHORIZED)

    def _change_issuer(
        self, admin: str, issuer: str, change: Callable[[str], None], topic: str
    ) -> None:
        self._authorize(admin, batch_storage.is_admin)
        change(issuer)
        self.env.publish((topic, admin), issuer)

    def initialize(self, admin: str, max_batch_size: int) -> None:
        """Set the admin and the largest batch allowed; may be done once only."""
        if self.storage.is_initialized():
            raise BatchError(BatchErrorCode.ALREADY_INITIALIZED)
        self.storage.initialize(admin, max_batch_size)
        self.env.publish((CONTRACT_INITIALIZED, admin), max_batch_size)

    def add_issuer(self, admin: str, issuer: str) -> None:
        """Approve an issuer; admin only."""
        self._change_issuer(admin, issuer, self.storage.add_issuer, ISSUER_ADDED)

    def remove_issuer(self, admin: str, issuer: str) -> None:
        """Withdraw an issuer's approval; admin only."""
        self._change_issuer(admin, issuer, self.storage.remove_issuer, ISSUER_REMOVED)

    def mint_single_certificate(
        self, issuer: str, owner: str, certificate: CertificateData
    ) -> None:
        """Mint one certificate for `owner`."""
        self._authorize(issuer, batch_storage.is_issuer)
        if not certificate.validate(self.env.timestamp):
            raise BatchError(BatchErrorCode.INVALID_TIME_RANGE)
        if self.storage.certificate_exists(certificate.id):
            raise BatchError(BatchErrorCode.DUPLICATE_CERTIFICATE)
        self.storage.save_certificate(owner, certificate)
        self.env.publish(
            (CERTIFICATE_MINTED, issuer, owner, certificate.id),
            (
                certificate.id,
                certificate.metadata_hash,
                certificate.valid_from,
                certificate.valid_until,
                certificate.revocable,
                certificate.cert_type.to_u32(),
            ),
        )

    def mint_batch_certificates(
        self,
        issuer: str,
        owners: Sequence[str],
        certificates: Sequence[CertificateData],
    ) -> list[MintResult]:
        """Mint each certificate for the owner at the same position.

        Raises BatchError for an unapproved issuer, a batch larger than
        allowed, or owners and certificates of different lengths; failures
        of single certificates are reported in the returned results.
        """
        self._authorize(issuer, batch_storage.is_issuer)
        owners = list(owners)
        certificates = list(certificates)
        if len(certificates) > self.storage.get_max_batch_size():
            raise BatchError(BatchErrorCode.BATCH_SIZE_TOO_LARGE)
        if len(certificates) != len(owners):
            raise BatchError(BatchErrorCode.INVALID_INPUT)

        results: list[MintResult] = []
        for owner, certificate in zip(owners, certificates):
            try:
                self.mint_single_certificate(issuer, owner, certificate)
            except BatchError as error:
                results.append(MintResult(certificate.id, error.code))
            else:
                results.append(MintResult(certificate.id))

        successes = sum(1 for result in results if result.succeeded)
        self.env.publish(
            (BATCH_MINT_COMPLETED, issuer),
            (len(results), successes, len(results) - successes),
        )
        return results

    def revoke_certificate(self, issuer: str, certificate_id: int) -> None:
        """End a revocable certificate's validity now; issuers only."""
        self._authorize(issuer, batch_storage.is_issuer)
        self.storage.revoke_certificate(certificate_id)
        self.env.publish((CERTIFICATE_REVOKED, issuer, certificate_id), ())

    def get_certificate(self, certificate_id: int) -> CertificateData | None:
        """Return a certificate, or None if there is none with this id."""
        return self.storage.get_certificate(certificate_id)

    def get_owner_certificates(self, owner: str) -> list[int]:
        """Return the ids of the certificates an address owns."""
        return self.storage.get_owner_certificates(owner)

    def is_issuer(self, address: str) -> bool:
        """Return whether the address is an approved issuer."""
        return self.storage.is_issuer(address)