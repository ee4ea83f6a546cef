"""Domain enumerations."""

import enum


class Role(str, enum.Enum):
    ADMIN = "admin"
    SUB_ADMIN = "sub-admin"
    USER = "user"


class DistanceUnit(str, enum.Enum):
    KILOMETERS = "km"
    METERS = "m"
