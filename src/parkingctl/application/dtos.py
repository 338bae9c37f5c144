# File: src/parkingctl/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Parking Registry

This module defines:
1. Request DTOs - typed views of a command's positional string arguments
2. OperationResult - what every service operation hands back to its caller

Request DTOs only parse; domain rules (positive price and hours, non-empty
plates, known spot kinds) are enforced by the domain models.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Sequence, Type, TypeVar
import re

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..domain.exceptions import ErrorKind, ValidationError

T = TypeVar('T', bound='CommandRequestDTO')

_INTEGER = re.compile(r'[+-]?[0-9]+')
_DECIMAL = re.compile(r'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?')
_BOOLEANS = {"true": True, "false": False}


def parse_int(value: Any) -> int:
    """Parse a whole number token, tolerating surrounding whitespace"""
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"not an integer: {value!r}")
    return int(text)


def parse_bool(value: Any) -> bool:
    """Parse a case-insensitive true/false token"""
    if isinstance(value, bool):
        return value
    try:
        return _BOOLEANS[str(value).strip().lower()]
    except KeyError:
        raise ValueError(f"not a boolean: {value!r}") from None


def parse_decimal(value: Any) -> Decimal:
    """Parse a finite decimal number token"""
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip()
        if not _DECIMAL.fullmatch(text):
            raise ValueError(f"not a number: {value!r}")
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"number out of range: {value!r}") from None
    if not number.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return number


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class CommandRequestDTO(BaseModel):
    """Base DTO built from a command's positional arguments"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_args(cls: Type[T], args: Sequence[str]) -> T:
        """
        Map positional arguments onto the fields in declaration order.
        Arguments past the last field are ignored.

        Raises: ValidationError if an argument is missing or unparsable
        """
        names = list(cls.model_fields)
        required = [name for name, info in cls.model_fields.items() if info.is_required()]

        if len(args) < len(required):
            raise ValidationError(
                f"{cls.__name__} expects at least {len(required)} arguments, got {len(args)}"
            )

        data: Dict[str, Any] = dict(zip(names, args))
        try:
            return cls(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid arguments for {cls.__name__}: {e.errors()}") from e


class SpotIdDTO(CommandRequestDTO):
    """Arguments: spot id"""
    spot_id: int

    @field_validator('spot_id', mode='before')
    @classmethod
    def validate_spot_id(cls, v):
        return parse_int(v)


# ============================================================================
# COMMAND REQUEST DTOs
# ============================================================================

class CreateParkingSpotDTO(SpotIdDTO):
    """Arguments: id, occupied, kind, price[, bound plate]"""
    occupied: bool
    kind: str
    price_per_hour: Decimal
    bound_plate: Optional[str] = None

    @field_validator('occupied', mode='before')
    @classmethod
    def validate_occupied(cls, v):
        return parse_bool(v)

    @field_validator('price_per_hour', mode='before')
    @classmethod
    def validate_price(cls, v):
        return parse_decimal(v)

    @property
    def is_subscription(self) -> bool:
        return self.kind.lower() == "subscription"


class ParkVehicleDTO(SpotIdDTO):
    """Arguments: spot id, plate, hours, requested kind"""
    registration_plate: str
    hours_parked: int
    kind: str

    @field_validator('hours_parked', mode='before')
    @classmethod
    def validate_hours(cls, v):
        return parse_int(v)


class FreeParkingSpotDTO(SpotIdDTO):
    """Arguments: spot id"""


class GetParkingSpotDTO(SpotIdDTO):
    """Arguments: spot id"""


class ParkingIntervalsQueryDTO(SpotIdDTO):
    """Arguments: spot id, plate"""
    registration_plate: str


# ============================================================================
# RESULTS
# ============================================================================

@dataclass(frozen=True)
class OperationResult:
    """Outcome of one registry operation"""
    success: bool
    message: str
    error: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, message: str) -> 'OperationResult':
        return cls(True, message)

    @classmethod
    def failed(cls, message: str, error: ErrorKind = ErrorKind.VALIDATION) -> 'OperationResult':
        return cls(False, message, error)

    def __str__(self) -> str:
        return self.message
