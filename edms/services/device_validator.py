"""
Validation des saisies appareil / Device input validation.

Transforme les champs bruts (formulaire ou JSON, toujours des chaines) en
DeviceInput type, ou leve DeviceValidationError avec le premier motif de
rejet rencontre. Fonction pure : seule l'heure courante est lue.
"""

import enum
from dataclasses import dataclass
from datetime import date, datetime

SERIAL_NUMBER_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 255
SIZE_MAX_LENGTH = 50
STATUS_MAX_LENGTH = 50


class DeviceValidationCode(str, enum.Enum):
    """Motifs de rejet, dans l'ordre des controles / Rejection reasons, in check order."""
    ROOM_REQUIRED = "RoomRequired"
    DEVICE_TYPE_REQUIRED = "DeviceTypeRequired"
    INVALID_ROOM_ID = "InvalidRoomID"
    INVALID_DEVICE_TYPE_ID = "InvalidDeviceTypeID"
    INVALID_EXTINGUISHER_TYPE_ID = "InvalidExtinguisherTypeID"
    INVALID_MANUFACTURE_DATE = "InvalidManufactureDate"
    MANUFACTURE_DATE_IN_FUTURE = "ManufactureDateInFuture"
    SERIAL_NUMBER_TOO_LONG = "SerialNumberTooLong"
    DESCRIPTION_TOO_LONG = "DescriptionTooLong"
    SIZE_TOO_LONG = "SizeTooLong"
    STATUS_TOO_LONG = "StatusTooLong"


MESSAGES = {
    DeviceValidationCode.ROOM_REQUIRED: "room is required",
    DeviceValidationCode.DEVICE_TYPE_REQUIRED: "device type is required",
    DeviceValidationCode.INVALID_ROOM_ID: "invalid room ID",
    DeviceValidationCode.INVALID_DEVICE_TYPE_ID: "invalid emergency device type ID",
    DeviceValidationCode.INVALID_EXTINGUISHER_TYPE_ID: "invalid extinguisher type ID",
    DeviceValidationCode.INVALID_MANUFACTURE_DATE: "invalid manufacture date format",
    DeviceValidationCode.MANUFACTURE_DATE_IN_FUTURE: "manufacture date cannot be in the future",
    DeviceValidationCode.SERIAL_NUMBER_TOO_LONG: f"serial number is too long, maximum {SERIAL_NUMBER_MAX_LENGTH} characters",
    DeviceValidationCode.DESCRIPTION_TOO_LONG: f"description is too long, maximum {DESCRIPTION_MAX_LENGTH} characters",
    DeviceValidationCode.SIZE_TOO_LONG: f"size is too long, maximum {SIZE_MAX_LENGTH} characters",
    DeviceValidationCode.STATUS_TOO_LONG: f"status is too long, maximum {STATUS_MAX_LENGTH} characters",
}


class DeviceValidationError(ValueError):
    """Saisie appareil invalide / Invalid device input."""

    def __init__(self, code: DeviceValidationCode):
        self.code = code
        super().__init__(MESSAGES[code])


@dataclass(frozen=True)
class DeviceInput:
    """Appareil valide, pret a persister / Validated device, ready to persist."""
    room_id: int
    emergency_device_type_id: int
    extinguisher_type_id: int | None = None
    serial_number: str | None = None
    manufacture_date: date | None = None
    description: str | None = None
    size: str | None = None
    status: str | None = None


def parse_int(value: str) -> int | None:
    """Entier decimal signe strict / Strict signed decimal integer."""
    if not value:
        return None
    digits = value[1:] if value[0] in "+-" else value
    if not digits.isascii() or not digits.isdigit():
        return None
    return int(value)


def parse_iso_date(value: str) -> date | None:
    """Parser une date YYYY-MM-DD / Parse a YYYY-MM-DD date.

    Chaine vide -> None. Format invalide -> ValueError.
    """
    if value == "":
        return None
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    return date.fromisoformat(value)


def validate_device(
    room_id: str,
    emergency_device_type_id: str,
    extinguisher_type_id: str = "",
    serial_number: str = "",
    manufacture_date: str = "",
    size: str = "",
    description: str = "",
    status: str = "",
    now: datetime | None = None,
) -> DeviceInput:
    """Valider une saisie appareil / Validate a device input.

    Les controles sont faits dans un ordre fixe, le premier echec gagne.
    Checks run in a fixed order; the first failure wins.
    """
    if room_id == "":
        raise DeviceValidationError(DeviceValidationCode.ROOM_REQUIRED)
    if emergency_device_type_id == "":
        raise DeviceValidationError(DeviceValidationCode.DEVICE_TYPE_REQUIRED)

    parsed_room_id = parse_int(room_id)
    if parsed_room_id is None:
        raise DeviceValidationError(DeviceValidationCode.INVALID_ROOM_ID)

    parsed_type_id = parse_int(emergency_device_type_id)
    if parsed_type_id is None:
        raise DeviceValidationError(DeviceValidationCode.INVALID_DEVICE_TYPE_ID)

    parsed_extinguisher_id = None
    if extinguisher_type_id != "":
        parsed_extinguisher_id = parse_int(extinguisher_type_id)
        if parsed_extinguisher_id is None:
            raise DeviceValidationError(DeviceValidationCode.INVALID_EXTINGUISHER_TYPE_ID)

    try:
        parsed_manufacture_date = parse_iso_date(manufacture_date)
    except ValueError:
        raise DeviceValidationError(DeviceValidationCode.INVALID_MANUFACTURE_DATE) from None

    today = (now or datetime.now()).date()
    if parsed_manufacture_date is not None and parsed_manufacture_date > today:
        raise DeviceValidationError(DeviceValidationCode.MANUFACTURE_DATE_IN_FUTURE)

    if len(serial_number) > SERIAL_NUMBER_MAX_LENGTH:
        raise DeviceValidationError(DeviceValidationCode.SERIAL_NUMBER_TOO_LONG)
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise DeviceValidationError(DeviceValidationCode.DESCRIPTION_TOO_LONG)
    if len(size) > SIZE_MAX_LENGTH:
        raise DeviceValidationError(DeviceValidationCode.SIZE_TOO_LONG)
    if len(status) > STATUS_MAX_LENGTH:
        raise DeviceValidationError(DeviceValidationCode.STATUS_TOO_LONG)

    return DeviceInput(
        room_id=parsed_room_id,
        emergency_device_type_id=parsed_type_id,
        extinguisher_type_id=parsed_extinguisher_id,
        serial_number=serial_number or None,
        manufacture_date=parsed_manufacture_date,
        description=description or None,
        size=size or None,
        status=status or None,
    )
