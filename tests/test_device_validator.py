"""Tests de validation des appareils / Device input validation tests."""

from datetime import date, datetime

import pytest

from edms.services.device_validator import (
    DeviceValidationCode,
    DeviceValidationError,
    parse_iso_date,
    validate_device,
)

NOW = datetime(2024, 6, 15, 10, 30)


def _validate(**overrides):
    fields = {"room_id": "1", "emergency_device_type_id": "2", "now": NOW}
    fields.update(overrides)
    return validate_device(**fields)


def _code(**overrides) -> DeviceValidationCode:
    with pytest.raises(DeviceValidationError) as exc_info:
        _validate(**overrides)
    return exc_info.value.code


def test_minimal_input():
    device = _validate()
    assert device.room_id == 1
    assert device.emergency_device_type_id == 2
    assert device.extinguisher_type_id is None
    assert device.manufacture_date is None
    assert device.serial_number is None
    assert device.status is None


def test_full_input():
    device = _validate(
        extinguisher_type_id="3",
        serial_number="SN1",
        manufacture_date="2024-01-31",
        size="5kg",
        description="Kitchen",
        status="Active",
    )
    assert device.extinguisher_type_id == 3
    assert device.manufacture_date == date(2024, 1, 31)
    assert (device.serial_number, device.size, device.description, device.status) == (
        "SN1", "5kg", "Kitchen", "Active",
    )


def test_room_required_checked_first():
    assert _code(room_id="", emergency_device_type_id="") == DeviceValidationCode.ROOM_REQUIRED


def test_device_type_required():
    assert _code(emergency_device_type_id="") == DeviceValidationCode.DEVICE_TYPE_REQUIRED


def test_required_checks_run_before_parsing():
    assert _code(room_id="abc", emergency_device_type_id="") == DeviceValidationCode.DEVICE_TYPE_REQUIRED


@pytest.mark.parametrize("room_id", ["abc", "1.5", " 1", "1 "])
def test_invalid_room_id(room_id):
    assert _code(room_id=room_id) == DeviceValidationCode.INVALID_ROOM_ID


def test_invalid_device_type_id():
    assert _code(emergency_device_type_id="x") == DeviceValidationCode.INVALID_DEVICE_TYPE_ID


def test_invalid_extinguisher_type_id():
    assert _code(extinguisher_type_id="CO2") == DeviceValidationCode.INVALID_EXTINGUISHER_TYPE_ID


def test_signed_ids_are_integers():
    assert _validate(room_id="+7").room_id == 7


@pytest.mark.parametrize("value", ["2024/01/01", "01-01-2024", "2024-1-1", "2024-02-30", "yesterday"])
def test_invalid_manufacture_date(value):
    assert _code(manufacture_date=value) == DeviceValidationCode.INVALID_MANUFACTURE_DATE


def test_manufacture_date_in_future():
    assert _code(manufacture_date="2024-06-16") == DeviceValidationCode.MANUFACTURE_DATE_IN_FUTURE


def test_manufacture_date_today_accepted():
    assert _validate(manufacture_date="2024-06-15").manufacture_date == date(2024, 6, 15)


@pytest.mark.parametrize(
    "field, limit, code",
    [
        ("serial_number", 50, DeviceValidationCode.SERIAL_NUMBER_TOO_LONG),
        ("description", 255, DeviceValidationCode.DESCRIPTION_TOO_LONG),
        ("size", 50, DeviceValidationCode.SIZE_TOO_LONG),
        ("status", 50, DeviceValidationCode.STATUS_TOO_LONG),
    ],
)
def test_length_limits(field, limit, code):
    assert getattr(_validate(**{field: "x" * limit}), field) == "x" * limit
    assert _code(**{field: "x" * (limit + 1)}) == code


def test_length_counts_characters():
    assert _validate(serial_number="é" * 50).serial_number == "é" * 50


def test_error_message():
    with pytest.raises(DeviceValidationError, match="invalid room ID"):
        _validate(room_id="r1")


def test_parse_iso_date_empty():
    assert parse_iso_date("") is None
