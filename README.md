# coursechain

In-memory ledgers for an online learning platform:

- **Course tracking** (`coursechain.courses`): `Course`, `Module` and
  `CourseRegistry`. A course reports its progress as a percentage of completed
  modules. Marking it completed succeeds only once every module is
  `ModuleStatus.COMPLETED`. It then records and prints a certificate notice and
  a completion event.
- **Progress ledger** (`coursechain.progress.Progress`): an admin registers
  courses with a number of modules. Each user records the completion of modules
  numbered from 1, and reads back a whole-number completion percentage.
- **Reward token** (`coursechain.token.Token`): an admin mints balances, and
  holders transfer them.
- **Certificates** (`coursechain.certificate.Certificate`): an admin grants,
  updates and revokes roles (`Role`, `Permission` in
  `coursechain.certificate_types`). Issuers mint certificates with 32-byte ids
  and revokers revoke them. Certificates carry an expiry date, where 0 means
  they never expire, and each student's certificates are tracked.
- **Batch certificates** (`coursechain.batch.CertificateContract`): the admin
  approves issuers, who mint certificates (`CertificateData` in
  `coursechain.batch_types`) one at a time or in batches up to a configured
  size. A batch returns one `MintResult` per certificate.

Each ledger runs against a shared `coursechain.env.Env`. The environment holds
the current `timestamp`. `generate_address()` creates addresses.
`mock_all_auths()` or `mock_auths(addresses)` decides which addresses count as
having authorised a call; any other address raises `AuthorizationError`. Every
published event is kept in `env.events` as an `Event(topics, data)`.

## Installation

```
pip install .
```

Install with tests:

```
pip install ".[test]"
pytest
```

## Quick start

```python
from coursechain.env import Env
from coursechain.token import Token, TokenError

env = Env(timestamp=0)
env.mock_all_auths()

admin = env.generate_address()
alice = env.generate_address()
bob = env.generate_address()

token = Token(env)
token.initialize(admin)
token.mint(alice, 100)
token.transfer(alice, bob, 50)
assert token.balance(bob) == 50

try:
    token.transfer(alice, bob, 100)
except TokenError as err:
    print(err.code.name)  # INSUFFICIENT_BALANCE
```

### Certificates

```python
from coursechain.certificate import Certificate
from coursechain.certificate_types import Permission, Role

cert = Certificate(env)
cert.initialize(admin)
issuer = env.generate_address()
cert.grant_role(issuer, Role(can_issue=True, can_revoke=False))
assert cert.has_permission(issuer, Permission.ISSUE)

cert_id = bytes(32)
cert.mint_certificate(
    issuer, cert_id, "CS101", alice,
    "Intro to Computer Science", "Fundamentals", "ipfs://metadata", 0,
)
metadata = cert.verify_certificate(cert_id)
assert cert.track_certificates(alice) == [cert_id]
```

### Batch minting

```python
from coursechain.batch import CertificateContract
from coursechain.batch_types import CertificateData, CertificateType

batch = CertificateContract(env)
batch.initialize(admin, 10)
batch.add_issuer(admin, issuer)

certificate = CertificateData(
    id=1, metadata_hash=bytes(32), valid_from=0, valid_until=86400,
    revocable=True, cert_type=CertificateType.STANDARD,
)
results = batch.mint_batch_certificates(issuer, [alice], [certificate])
assert results[0].succeeded
```

A failing operation raises the error class of its ledger: `CertificateError`,
`ProgressError`, `TokenError` or `BatchError`. Each carries a `code` from the
matching error-code enum. Inside a batch, the failure of a single certificate
does not raise. It is reported as the `error` of that certificate's
`MintResult` instead.

## Command line

`coursechain-demo` registers a sample course and tries to complete it twice:
once while a module is still unfinished, and once after every module is
finished. It prints each step.

```
coursechain-demo
```

## What it does not do

Every ledger keeps its state in memory for the life of the objects. Nothing is
saved to disk or sent over a network. Authorisation is decided only by what
`Env` has been told to accept, and the clock moves only when `env.timestamp`
is set.