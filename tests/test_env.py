import pytest

from coursechain.env import AuthorizationError, Env, Event


def test_generated_addresses_are_unique():
    env = Env()
    addresses = [env.generate_address() for _ in range(50)]
    assert len(set(addresses)) == 50
    assert all(a.startswith("G") for a in addresses)


def test_default_timestamp_is_zero():
    assert Env().timestamp == 0


def test_timestamp_given_is_kept_and_settable():
    env = Env(timestamp=1000)
    assert env.timestamp == 1000
    env.timestamp = 1010
    assert env.timestamp == 1010


def test_require_auth_fails_without_mocks():
    env = Env()
    address = env.generate_address()
    with pytest.raises(AuthorizationError) as info:
        env.require_auth(address)
    assert info.value.address == address


def test_mock_all_auths_allows_any_address():
    env = Env()
    env.mock_all_auths()
    addresses = [env.generate_address() for _ in range(3)]
    for address in addresses:
        env.require_auth(address)
    assert env.events == []


def test_mock_auths_allows_only_listed():
    env = Env()
    admin = env.generate_address()
    other = env.generate_address()
    env.mock_auths([admin])
    env.require_auth(admin)
    with pytest.raises(AuthorizationError):
        env.require_auth(other)


def test_mock_auths_replaces_mock_all():
    env = Env()
    admin = env.generate_address()
    env.mock_all_auths()
    env.mock_auths([])
    with pytest.raises(AuthorizationError):
        env.require_auth(admin)


def test_publish_records_events_in_order():
    env = Env()
    env.publish(("contract_initialized",), "admin")
    env.publish(["role_added", "user"], (True, False))
    assert env.events == [
        Event(("contract_initialized",), "admin"),
        Event(("role_added", "user"), (True, False)),
    ]