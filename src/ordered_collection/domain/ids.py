"""Opaque item ID generation and collision suffixing."""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable, Container
from typing import Final

from ordered_collection.constants import DEFAULT_GENERATED_ID_PREFIX, ID_SUFFIX_SEPARATOR

CROCKFORD_BASE32_ALPHABET: Final[str] = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ULID_LENGTH: Final[int] = 26
ULID_RANDOM_BYTES: Final[int] = 10
ULID_MAX_TIMESTAMP_MS: Final[int] = (1 << 48) - 1

_RandBytes = Callable[[int], bytes]
IdFactory = Callable[[], str]

__all__ = [
    "CROCKFORD_BASE32_ALPHABET",
    "IdFactory",
    "ULID_LENGTH",
    "ULID_MAX_TIMESTAMP_MS",
    "disambiguate_id",
    "generate_item_id",
    "generate_prefixed_id",
    "generate_ulid",
    "prefixed_id_factory",
    "validate_item_id",
]


def generate_ulid(
    *,
    timestamp_ms: int | None = None,
    randbytes: _RandBytes | None = None,
) -> str:
    """Generate a ULID as a 26-character uppercase Crockford Base32 string."""
    ts_ms = _resolve_timestamp_ms(timestamp_ms)
    random_bytes = _resolve_random_bytes(randbytes)
    ulid_value = (ts_ms << 80) | int.from_bytes(random_bytes, "big")
    return _encode_crockford_base32(ulid_value, ULID_LENGTH)


def generate_prefixed_id(
    prefix: str,
    *,
    timestamp_ms: int | None = None,
    randbytes: _RandBytes | None = None,
) -> str:
    """Generate an ID in the form ``<prefix>-<ulid>``."""
    _validate_prefix(prefix)
    ulid_value = generate_ulid(timestamp_ms=timestamp_ms, randbytes=randbytes)
    return f"{prefix}{ID_SUFFIX_SEPARATOR}{ulid_value}"


def generate_item_id(
    prefix: str = DEFAULT_GENERATED_ID_PREFIX,
    *,
    timestamp_ms: int | None = None,
    randbytes: _RandBytes | None = None,
) -> str:
    return generate_prefixed_id(prefix, timestamp_ms=timestamp_ms, randbytes=randbytes)


def prefixed_id_factory(prefix: str = DEFAULT_GENERATED_ID_PREFIX) -> IdFactory:
    """Return a zero-argument generator of ``<prefix>-<ulid>`` IDs."""
    _validate_prefix(prefix)

    def factory() -> str:
        return generate_item_id(prefix)

    return factory


def validate_item_id(item_id: str) -> str:
    """Validate a caller-supplied item ID and return it unchanged."""
    if not isinstance(item_id, str):
        raise TypeError(f"item_id must be a string, got {type(item_id).__name__}")
    if not item_id:
        raise ValueError("item_id must be non-empty")
    return item_id


def disambiguate_id(candidate: str, taken: Container[str]) -> str:
    """
    Return ``candidate`` or the first free ``<candidate>-<n>`` for ``n >= 1``.

    Suffixes are tried in order, so the second ``"X"`` becomes ``"X-1"`` and
    the third ``"X-2"``. A suffixed form that was itself stored explicitly is
    skipped rather than reused.
    """
    resolved = candidate
    counter = 1
    while resolved in taken:
        resolved = f"{candidate}{ID_SUFFIX_SEPARATOR}{counter}"
        counter += 1
    return resolved


# ------------------------
# Internal helper routines
# ------------------------


def _resolve_timestamp_ms(timestamp_ms: int | None) -> int:
    resolved = time.time_ns() // 1_000_000 if timestamp_ms is None else timestamp_ms
    if not isinstance(resolved, int):
        raise ValueError(f"timestamp_ms must be an int, got {type(resolved).__name__}")
    if not 0 <= resolved <= ULID_MAX_TIMESTAMP_MS:
        raise ValueError(
            f"timestamp_ms out of range: expected 0..{ULID_MAX_TIMESTAMP_MS}, got {resolved}"
        )
    return resolved


def _resolve_random_bytes(randbytes: _RandBytes | None) -> bytes:
    provider = secrets.token_bytes if randbytes is None else randbytes
    raw = provider(ULID_RANDOM_BYTES)
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise ValueError("randbytes must return a bytes-like object")
    as_bytes = bytes(raw)
    if len(as_bytes) != ULID_RANDOM_BYTES:
        raise ValueError(f"randbytes must return exactly {ULID_RANDOM_BYTES} bytes")
    return as_bytes


def _encode_crockford_base32(value: int, length: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")

    mask = 0b11111
    chars = ["0"] * length
    working = value
    for index in range(length - 1, -1, -1):
        chars[index] = CROCKFORD_BASE32_ALPHABET[working & mask]
        working >>= 5

    if working != 0:
        raise ValueError(f"value does not fit into {length} Crockford Base32 characters")
    return "".join(chars)


def _validate_prefix(prefix: str) -> None:
    if not isinstance(prefix, str):
        raise ValueError(f"prefix must be a string, got {type(prefix).__name__}")
    if not prefix:
        raise ValueError("prefix must be non-empty")
    if ID_SUFFIX_SEPARATOR in prefix:
        raise ValueError(f"prefix must not contain '{ID_SUFFIX_SEPARATOR}'")
