# libdns

Provider-neutral interfaces and record types for working with DNS zones
through DNS provider APIs.

The package gives you:

- protocols that provider clients implement (`libdns.core`):
  `RecordGetter`, `RecordAppender`, `RecordSetter`, `RecordDeleter` and
  `ZoneLister`, together with the `Zone` type and the `AtomicError`
  exception for operations that failed but left the zone unchanged;
- the opaque `RR` record (name, TTL, type, data) and typed records
  (`libdns.rrtypes`): `Address` (A/AAAA), `CAA`, `CNAME`, `MX`, `NS`,
  `SRV`, `ServiceBinding` (SVCB/HTTPS) and `TXT`;
- `SvcParams` with `parse_svc_params` for RFC 9460 presentation format
  (`libdns.svcparams`);
- helpers to convert between names relative to a zone and fully-qualified
  names: `relative_name` and `absolute_name`;
- an in-memory `DummyProvider` (`libdns.dummy`) and an end-to-end suite
  for checking a provider implementation (`libdns.e2e`).

Record names are always relative to the zone, with `@` for the zone apex.
TTLs are `datetime.timedelta` values.

## Installation

```
pip install libdns
```

The package has no runtime dependencies.

## Names

```python
from libdns.core import absolute_name, relative_name

relative_name("sub.example.com.", "example.com.")   # "sub"
relative_name("example.com.", "example.com.")       # "@"
absolute_name("sub", "example.com.")                # "sub.example.com."
absolute_name("@", "example.com.")                  # "example.com."
absolute_name("www.", "example.com.")               # "www." (already absolute)
```

## Records

Every record has an `rr()` method that reduces it to an `RR`; the
`provider_data` field of the typed records is not carried over. An `RR` of
a known type can be parsed into the matching typed record; an `RR` of any
other type parses to itself.

```python
from datetime import timedelta
from libdns.rrtypes import RR

rr = RR(name="@", ttl=timedelta(minutes=5), type="MX", data="10 mail.example.com.")
mx = rr.parse()          # MX(name="@", ttl=..., preference=10, target="mail.example.com.")
mx.rr() == rr            # True
```

The functions in `libdns.parsing` (`parse_rr`, `to_address`, `to_caa`,
`to_cname`, `to_mx`, `to_ns`, `to_srv`, `to_service_binding`, `to_txt`)
do the same conversions one type at a time and raise `ValueError` when the
type does not match or the data is malformed.

SRV names have the form `_service._proto[.name]`; SVCB/HTTPS names have
the form `[_port.]_scheme[.name]` (HTTPS records may omit the scheme). A
missing trailing name stands for `@`. When reduced to an `RR`, a
`ServiceBinding` with scheme `https`, `http`, `wss` or `ws` becomes an
HTTPS record and any other scheme an SVCB record; a priority of 0 (alias
mode) drops the parameters.

## SVCB parameters

```python
from libdns.svcparams import parse_svc_params

params = parse_svc_params('alpn="h2,h3" no-default-alpn port=443')
params["alpn"]              # ["h2", "h3"]
params["no-default-alpn"]   # [] (a flag with no value)
str(params)                 # zone presentation format again
```

`parse_svc_params` decodes `\DDD` escapes and raises `ValueError` on
malformed input.

## The in-memory provider

`DummyProvider(*zones)` serves the given zones (by default
`example.com.`) and implements every protocol above. Plain `RR`s handed to
it are stored as their typed records where they parse. Naming a zone it
does not serve raises `ZoneNotFoundError`.

```python
from libdns.dummy import DummyProvider
from libdns.rrtypes import RR

provider = DummyProvider("example.com.")
provider.append_records("example.com.", [RR(name="www", type="A", data="192.0.2.1")])
provider.get_records("example.com.")    # [Address(name="www", ..., ip=IPv4Address("192.0.2.1"))]
```

## Checking a provider

`libdns.e2e` holds a suite that creates, changes and deletes records named
`test-append`, `test-set`, `test-delete` and so on. Point it at a dedicated
test zone.

```python
from libdns.dummy import DummyProvider
from libdns.e2e import CheckStatus, full_suite

provider = DummyProvider("example.com.")
results = full_suite(provider, "example.com.").run_full_tests()
all(result.status is CheckStatus.PASSED for result in results)   # True
```

`run_full_tests` runs the zone-listing check and then the record checks;
`run_record_tests` runs the record checks alone. Each returns a list of
`CheckResult` values (name, status and error messages). Use `record_suite`
for providers that do not implement `list_zones`; its zone-listing check
reports `SKIPPED`. The individual `check_*` methods raise `CheckFailed`
(an `AssertionError`) when they find problems, which makes them usable
directly inside a test. Set `append_record_func` on the suite to build the
records handed to the provider from plain `RR`s.

## What this package does not do

It contains no client for any real DNS provider's API and no command-line
program: it defines the interfaces, the record types and the checks, and
`DummyProvider` keeps records only in memory.