"""Value types and errors of the batch certificate contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_HASH_LENGTH = 32


class CertificateType(IntEnum):
    """The grade of a certificate, with its wire number."""

    STANDARD = 0
    PREMIUM = 1
    GOLD = 2

    @classmethod
    def from_u32(cls, value: int) -> CertificateType | None:
        """Return the type with this wire number, or None if there is none."""
        try:
            return cls(value)
        except ValueError:
            return None

    def to_u32(self) -> int:
        """Return the wire number of this type."""
        return int(self.value)


class BatchErrorCode(IntEnum):
    """Error codes reported by the batch certificate contract."""

    UNAUTHORIZED = 1
    ALREADY_INITIALIZED = 2
    NOT_INITIALIZED = 3

    INVALID_INPUT = 100
    DUPLICATE_CERTIFICATE = 101
    STORAGE_ERROR = 102
    BATCH_SIZE_TOO_LARGE = 103
    INVALID_TIME_RANGE = 104
    BATCH_SIZE_EXCEEDED = 105

    CERTIFICATE_NOT_FOUND = 200
    CERTIFICATE_ALREADY_REVOKED = 201
    CERTIFICATE_NOT_REVOCABLE = 202


class BatchError(Exception):
    """A batch certificate contract call failed."""

    def __init__(self, code: BatchErrorCode) -> None:
        super().__init__(code.name)
        self.code = code


@dataclass(frozen=True)
class CertificateData:
    """A certificate as minted by the batch contract."""

    id: int
    metadata_hash: bytes
    valid_from: int
    valid_until: int
    revocable: bool
    cert_type: CertificateType

    def __post_init__(self) -> None:
        metadata_hash = bytes(self.metadata_hash)
        if len(metadata_hash) != _HASH_LENGTH:
            raise ValueError(
                f"metadata hash must be {_HASH_LENGTH} bytes, got {len(metadata_hash)}"
            )
        object.__setattr__(self, "metadata_hash", metadata_hash)

    def validate(self, now: int) -> bool:
        """Return whether the validity window is well formed and not yet over."""
        if self.valid_from >= self.valid_until:
            return False
        return self.valid_until > now


@dataclass(frozen=True)
class MintResult:
    """The outcome of minting one certificate of a batch.

    `error` is None when the certificate was minted.
    """

    certificate_id: int
    error: BatchErrorCode | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the certificate was minted."""
        return self.error is None