import pytest

from coursechain.batch_storage import (
    BatchStorage,
    add_issuer,
    is_admin,
    is_issuer,
    remove_issuer,
)
from coursechain.batch_types import (
    BatchError,
    BatchErrorCode,
    CertificateData,
    CertificateType,
)
from coursechain.env import Env


def make_certificate(cert_id=1, revocable=True):
    return CertificateData(
        id=cert_id,
        metadata_hash=bytes([1] * 32),
        valid_from=0,
        valid_until=86400,
        revocable=revocable,
        cert_type=CertificateType.STANDARD,
    )


def expect(code, call, *args):
    with pytest.raises(BatchError) as info:
        call(*args)
    assert info.value.code is code


@pytest.fixture
def env():
    return Env()


@pytest.fixture
def storage(env):
    store = BatchStorage(env)
    store.initialize("admin", 5)
    return store


UNINITIALISED_CALLS = {
    "get_admin": lambda s: s.get_admin(),
    "get_max_batch_size": lambda s: s.get_max_batch_size(),
    "is_issuer": lambda s: s.is_issuer("a"),
    "add_issuer": lambda s: s.add_issuer("a"),
    "remove_issuer": lambda s: s.remove_issuer("a"),
    "certificate_exists": lambda s: s.certificate_exists(1),
    "save_certificate": lambda s: s.save_certificate("a", make_certificate()),
    "get_certificate": lambda s: s.get_certificate(1),
    "get_owner_certificates": lambda s: s.get_owner_certificates("a"),
    "revoke_certificate": lambda s: s.revoke_certificate(1),
    "auth.is_admin": lambda s: is_admin(s, "a"),
    "auth.is_issuer": lambda s: is_issuer(s, "a"),
}


@pytest.mark.parametrize("name", sorted(UNINITIALISED_CALLS))
def test_uninitialised_storage_refuses_calls(env, name):
    store = BatchStorage(env)
    assert store.is_initialized() is False
    expect(BatchErrorCode.NOT_INITIALIZED, UNINITIALISED_CALLS[name], store)


def test_initialize_records_admin_and_batch_size(storage):
    assert storage.is_initialized() is True
    assert (storage.get_admin(), storage.get_max_batch_size()) == ("admin", 5)


def test_initialize_twice_fails(storage):
    expect(BatchErrorCode.ALREADY_INITIALIZED, storage.initialize, "other", 3)
    assert storage.get_admin() == "admin"


def test_issuers_added_and_removed(storage):
    steps = [
        (None, False),
        (storage.add_issuer, True),
        (storage.add_issuer, True),
        (storage.remove_issuer, False),
        (storage.remove_issuer, False),
    ]
    for action, expected in steps:
        if action is not None:
            action("issuer")
        assert storage.is_issuer("issuer") is expected


def test_save_and_get_certificate(storage):
    certificate = make_certificate(3)
    assert storage.certificate_exists(3) is False
    storage.save_certificate("owner", certificate)
    assert storage.certificate_exists(3) is True
    assert storage.get_certificate(3) == certificate
    assert storage.get_certificate(4) is None
    assert storage.get_owner_certificates("owner") == [3]


def test_duplicate_certificate_rejected(storage):
    storage.save_certificate("owner", make_certificate(1))
    expect(BatchErrorCode.DUPLICATE_CERTIFICATE, storage.save_certificate, "someone", make_certificate(1))
    assert storage.get_owner_certificates("someone") == []


def test_owner_list_keeps_order_and_is_a_copy(storage):
    for cert_id in (2, 1):
        storage.save_certificate("owner", make_certificate(cert_id))
    owned = storage.get_owner_certificates("owner")
    assert owned == [2, 1]
    owned.append(99)
    assert storage.get_owner_certificates("owner") == [2, 1]


def test_revoke_ends_validity_now(env, storage):
    storage.save_certificate("owner", make_certificate(1))
    env.timestamp = 1234
    storage.revoke_certificate(1)
    revoked = storage.get_certificate(1)
    assert revoked.valid_until == 1234
    assert revoked.validate(env.timestamp) is False


def test_revoke_not_revocable(storage):
    certificate = make_certificate(1, revocable=False)
    storage.save_certificate("owner", certificate)
    expect(BatchErrorCode.CERTIFICATE_NOT_REVOCABLE, storage.revoke_certificate, 1)
    assert storage.get_certificate(1) == certificate


def test_revoke_missing(storage):
    expect(BatchErrorCode.CERTIFICATE_NOT_FOUND, storage.revoke_certificate, 42)


def test_auth_helpers(storage):
    assert is_admin(storage, "admin") is True
    assert is_admin(storage, "intruder") is False
    add_issuer(storage, "admin", "issuer")
    assert is_issuer(storage, "issuer") is True
    remove_issuer(storage, "admin", "issuer")
    assert is_issuer(storage, "issuer") is False


def test_auth_helpers_reject_non_admin(storage):
    expect(BatchErrorCode.UNAUTHORIZED, add_issuer, storage, "intruder", "issuer")
    assert storage.is_issuer("issuer") is False
    add_issuer(storage, "admin", "issuer")
    expect(BatchErrorCode.UNAUTHORIZED, remove_issuer, storage, "intruder", "issuer")
    assert storage.is_issuer("issuer") is True