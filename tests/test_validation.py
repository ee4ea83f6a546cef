"""Unit tests for field validation rules and partial updates."""

import math

import pytest

from rms.domain.entities import (
    Address,
    AddressUpdate,
    Coordinate,
    ProfileUpdate,
    UserContext,
)
from rms.domain.enums import Role
from rms.domain.errors import ValidationError
from rms.domain.validation import (
    ADDRESS_RULE,
    CITY_RULE,
    LATITUDE_RULE,
    LONGITUDE_RULE,
    PIN_CODE_RULE,
    STATE_RULE,
    apply_address_update,
    apply_profile_update,
    check,
    is_email_valid,
    validate,
    validate_new_address,
)


class TestLengthRules:
    @pytest.mark.parametrize("length", [3, 10, 30])
    def test_address_line_accepted(self, length):
        assert validate("a" * length, ADDRESS_RULE)

    @pytest.mark.parametrize("length", [0, 1, 2, 31, 50])
    def test_address_line_rejected(self, length):
        assert not validate("a" * length, ADDRESS_RULE)

    def test_state_bounds(self):
        assert not validate("KA", STATE_RULE)
        assert validate("Goa", STATE_RULE)
        assert validate("x" * 16, STATE_RULE)
        assert not validate("x" * 17, STATE_RULE)

    def test_city_bounds(self):
        assert not validate("NY", CITY_RULE)
        assert validate("Pune", CITY_RULE)
        assert validate("x" * 20, CITY_RULE)
        assert not validate("x" * 21, CITY_RULE)


class TestPinCode:
    @pytest.mark.parametrize("pin", ["", "12345", "1234567", "5600011"])
    def test_wrong_length_rejected(self, pin):
        assert not validate(pin, PIN_CODE_RULE)

    @pytest.mark.parametrize("pin", ["560001", "ABC123", "  12 3"])
    def test_six_characters_accepted_regardless_of_content(self, pin):
        assert validate(pin, PIN_CODE_RULE)


class TestCoordinateRanges:
    @pytest.mark.parametrize("lat", [-90, -45.5, 0, 0.0, 12.97, 90])
    def test_latitude_inside(self, lat):
        assert validate(lat, LATITUDE_RULE)

    @pytest.mark.parametrize("lat", [-90.0001, 90.0001, -180, 1000])
    def test_latitude_outside(self, lat):
        assert not validate(lat, LATITUDE_RULE)

    @pytest.mark.parametrize("lng", [-180, -0.5, 0, 77.59, 180])
    def test_longitude_inside(self, lng):
        assert validate(lng, LONGITUDE_RULE)

    @pytest.mark.parametrize("lng", [-180.0001, 180.0001, 360])
    def test_longitude_outside(self, lng):
        assert not validate(lng, LONGITUDE_RULE)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, value):
        assert not validate(value, LATITUDE_RULE)
        assert not validate(value, LONGITUDE_RULE)


class TestCheck:
    def test_returns_value_on_success(self):
        assert check("city", "Mysuru", CITY_RULE) == "Mysuru"

    def test_raises_with_field_message(self):
        with pytest.raises(ValidationError, match="City must be with in 2 to 20 letter."):
            check("city", "X", CITY_RULE)

    def test_error_carries_field_name(self):
        with pytest.raises(ValidationError) as exc:
            check("pin_code", "123", PIN_CODE_RULE)
        assert exc.value.field == "pin_code"
        assert exc.value.status_code == 400


class TestEmail:
    @pytest.mark.parametrize(
        "email", ["a@b.co", "first.last+tag@example.com", "x_y@sub.domain.org"]
    )
    def test_valid(self, email):
        assert is_email_valid(email)

    @pytest.mark.parametrize("email", ["", "plain", "a@b", "@example.com", "a b@c.com"])
    def test_invalid(self, email):
        assert not is_email_valid(email)


class TestNewAddress:
    def test_valid_address_builds_entity(self):
        address = validate_new_address(
            "12 MG Road", "Karnataka", "Bengaluru", "560001", 12.97, 77.59
        )
        assert address.city == "Bengaluru"
        assert address.location == Coordinate(12.97, 77.59)

    def test_first_failing_field_is_reported(self):
        with pytest.raises(ValidationError, match="State must be"):
            validate_new_address("12 MG Road", "KA", "B", "1", 200, 200)

    def test_invalid_longitude(self):
        with pytest.raises(ValidationError, match="Invalid Longitude."):
            validate_new_address(
                "12 MG Road", "Karnataka", "Bengaluru", "560001", 12.97, 181
            )


class TestAddressUpdate:
    def setup_method(self):
        self.existing = Address(
            id=7,
            address="12 MG Road",
            state="Karnataka",
            city="Bengaluru",
            pin_code="560001",
            location=Coordinate(12.97, 77.59),
        )

    def test_omitted_city_keeps_stored_value(self):
        updated = apply_address_update(self.existing, AddressUpdate(state="Kerala"))
        assert updated.city == "Bengaluru"
        assert updated.state == "Kerala"
        assert updated.id == 7

    def test_empty_update_is_noop(self):
        assert apply_address_update(self.existing, AddressUpdate()) == self.existing

    def test_existing_entity_is_not_mutated(self):
        apply_address_update(self.existing, AddressUpdate(city="Mysuru"))
        assert self.existing.city == "Bengaluru"

    def test_provided_invalid_field_rejected(self):
        with pytest.raises(ValidationError, match="City must be"):
            apply_address_update(self.existing, AddressUpdate(city="ab"))

    def test_empty_strings_keep_stored_values(self):
        updated = apply_address_update(
            self.existing,
            AddressUpdate(address="", state="", city="", pin_code="", latitude=1.0),
        )
        assert updated.address == "12 MG Road"
        assert updated.state == "Karnataka"
        assert updated.city == "Bengaluru"
        assert updated.pin_code == "560001"
        assert updated.location == Coordinate(1.0, 77.59)

    def test_empty_city_with_other_change(self):
        updated = apply_address_update(
            self.existing, AddressUpdate(city="", state="Kerala")
        )
        assert updated.city == "Bengaluru"
        assert updated.state == "Kerala"

    def test_zero_latitude_is_a_real_coordinate(self):
        updated = apply_address_update(
            self.existing, AddressUpdate(latitude=0.0, longitude=0.0)
        )
        assert updated.location == Coordinate(0.0, 0.0)

    def test_only_longitude_changes(self):
        updated = apply_address_update(self.existing, AddressUpdate(longitude=-1.5))
        assert updated.location == Coordinate(12.97, -1.5)

    def test_invalid_latitude_rejected(self):
        with pytest.raises(ValidationError, match="Invalid Latitude."):
            apply_address_update(self.existing, AddressUpdate(latitude=-91))


class TestProfileUpdate:
    def setup_method(self):
        self.user = UserContext(
            id=1,
            name="Alice",
            email="alice@example.com",
            password_hash="stored-hash",
            role=Role.USER,
            user_role_id=1,
        )

    @staticmethod
    def _hash(password: str) -> str:
        return f"hashed:{password}"

    def test_nothing_provided_keeps_everything(self):
        assert apply_profile_update(self.user, ProfileUpdate(), self._hash) == (
            "Alice",
            "alice@example.com",
            "stored-hash",
        )

    def test_blank_name_keeps_stored_name(self):
        name, _, _ = apply_profile_update(self.user, ProfileUpdate(name=""), self._hash)
        assert name == "Alice"

    def test_new_password_is_hashed(self):
        _, _, password = apply_profile_update(
            self.user, ProfileUpdate(password="n3w"), self._hash
        )
        assert password == "hashed:n3w"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError, match="Invalid Email.") as exc:
            apply_profile_update(self.user, ProfileUpdate(email="nope"), self._hash)
        assert exc.value.field == "email"

    def test_blank_email_keeps_stored_email(self):
        _, email, _ = apply_profile_update(
            self.user, ProfileUpdate(name="Alicia", email=""), self._hash
        )
        assert email == "alice@example.com"

    def test_valid_email_replaces_stored(self):
        _, email, _ = apply_profile_update(
            self.user, ProfileUpdate(email="alice@new.org"), self._hash
        )
        assert email == "alice@new.org"
