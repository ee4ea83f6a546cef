"""
Field validation rules
======================

Each rule is a small frozen dataclass; ``validate`` answers pass/fail and
``check`` raises :class:`ValidationError` with the field's message.

Length rules are half-open: ``min_exclusive < len(value) <= max_inclusive``.
Range rules are closed: ``low <= value <= high``.  NaN never satisfies a
range rule, so non-finite coordinates are rejected as well.

Partial updates
---------------
``apply_address_update`` and ``apply_profile_update`` treat ``None`` and
``""`` as "keep the stored value".  Coordinates only treat ``None`` that
way: ``0.0`` is an accepted latitude / longitude, not a sentinel.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Union

from .entities import Address, AddressUpdate, Coordinate, ProfileUpdate, UserContext
from .errors import ValidationError


# ── Rules ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LengthRule:
    min_exclusive: int
    max_inclusive: int
    message: str


@dataclass(frozen=True)
class FixedLengthRule:
    length: int
    message: str


@dataclass(frozen=True)
class RangeRule:
    low: float
    high: float
    message: str


Rule = Union[LengthRule, FixedLengthRule, RangeRule]

ADDRESS_RULE = LengthRule(2, 30, "Address must be with in 2 to 30 letter.")
STATE_RULE = LengthRule(2, 16, "State must be with in 2 to 16 letter.")
CITY_RULE = LengthRule(2, 20, "City must be with in 2 to 20 letter.")
PIN_CODE_RULE = FixedLengthRule(6, "PinCode must 6 digit.")
LATITUDE_RULE = RangeRule(-90.0, 90.0, "Invalid Latitude.")
LONGITUDE_RULE = RangeRule(-180.0, 180.0, "Invalid Longitude.")

EMAIL_MESSAGE = "Invalid Email."
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def validate(value: Any, rule: Rule) -> bool:
    """Return ``True`` if *value* satisfies *rule*."""
    if isinstance(rule, LengthRule):
        return rule.min_exclusive < len(value) <= rule.max_inclusive
    if isinstance(rule, FixedLengthRule):
        return len(value) == rule.length
    if isinstance(rule, RangeRule):
        return rule.low <= value <= rule.high
    raise TypeError(f"Unsupported rule: {rule!r}")


def check(field: str, value: Any, rule: Rule) -> Any:
    """Return *value* unchanged, or raise ``ValidationError``."""
    if not validate(value, rule):
        raise ValidationError(rule.message, field=field)
    return value


def is_email_valid(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


# ── Address ───────────────────────────────────────────────────────────


def validate_new_address(
    address: str,
    state: str,
    city: str,
    pin_code: str,
    latitude: float,
    longitude: float,
) -> Address:
    """Validate every field of a new address; rules run in field order."""
    return Address(
        address=check("address", address, ADDRESS_RULE),
        state=check("state", state, STATE_RULE),
        city=check("city", city, CITY_RULE),
        pin_code=check("pin_code", pin_code, PIN_CODE_RULE),
        location=Coordinate(
            check("latitude", latitude, LATITUDE_RULE),
            check("longitude", longitude, LONGITUDE_RULE),
        ),
    )


def _merge(field: str, new: Any, current: Any, rule: Rule) -> Any:
    if new is None or new == "":
        return current
    return check(field, new, rule)


def apply_address_update(existing: Address, update: AddressUpdate) -> Address:
    """Return *existing* with the provided fields of *update* applied."""
    return existing.with_changes(
        address=_merge("address", update.address, existing.address, ADDRESS_RULE),
        state=_merge("state", update.state, existing.state, STATE_RULE),
        city=_merge("city", update.city, existing.city, CITY_RULE),
        pin_code=_merge(
            "pin_code", update.pin_code, existing.pin_code, PIN_CODE_RULE
        ),
        location=Coordinate(
            _merge(
                "latitude",
                update.latitude,
                existing.location.latitude,
                LATITUDE_RULE,
            ),
            _merge(
                "longitude",
                update.longitude,
                existing.location.longitude,
                LONGITUDE_RULE,
            ),
        ),
    )


# ── Profile ───────────────────────────────────────────────────────────


def apply_profile_update(
    user: UserContext,
    update: ProfileUpdate,
    hash_password: Callable[[str], str],
) -> tuple[str, str, str]:
    """Resolve ``(name, email, password_hash)`` for a profile update."""
    name = update.name if update.name else user.name

    email = user.email
    if update.email:
        if not is_email_valid(update.email):
            raise ValidationError(EMAIL_MESSAGE, field="email")
        email = update.email

    password_hash = user.password_hash
    if update.password:
        password_hash = hash_password(update.password)

    return name, email, password_hash


def is_finite_coordinate(coordinate: Coordinate) -> bool:
    return math.isfinite(coordinate.latitude) and math.isfinite(
        coordinate.longitude
    )
