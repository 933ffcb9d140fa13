"""Input validation for cars and service records, before anything is written."""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator, FormatChecker
from jsonschema.exceptions import ValidationError, best_match

from .exceptions import ValidationFailedError
from .kinds import ServiceKind
from .service_record import SELF_SERVICE_LOCATION

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"

# Forms send these empty when unused.
OPTIONAL_TEXT_FIELDS = (
    "customServiceType",
    "partsReplaced",
    "serviceLocation",
    "invoicePhotoUrl",
    "notes",
)


@dataclass
class CarInput:
    """Validated car registration or edit form."""

    make: str
    model: str
    year: int
    license_plate: str
    current_mileage: int


@dataclass
class ServiceInput:
    """Validated service record form."""

    service_date: date
    mileage_at_service: int
    service_type: ServiceKind
    description: str
    is_self_service: bool
    custom_service_type: Optional[str] = None
    parts_replaced: Optional[str] = None
    service_location: Optional[str] = None
    service_cost: Optional[float] = None
    invoice_url: Optional[str] = None
    notes: Optional[str] = None


@lru_cache(maxsize=None)
def load_schema() -> dict:
    """Load the input schemas from schema.yaml."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def _validator(name: str) -> Draft202012Validator:
    return Draft202012Validator(load_schema()[name], format_checker=FormatChecker())


def _describe(error: ValidationError) -> Tuple[Optional[str], str]:
    """Turn a schema error into (field, human-readable reason)."""
    if error.validator == "required":
        missing = [f for f in error.validator_value if f not in error.instance]
        field = missing[0] if missing else None
        return field, error.schema.get("errorMessage") or f"{field} is required"
    field = str(error.path[0]) if error.path else None
    return field, error.schema.get("errorMessage") or error.message


def _check(name: str, data: Dict[str, Any]) -> None:
    error = best_match(_validator(name).iter_errors(data))
    if error is not None:
        field, reason = _describe(error)
        raise ValidationFailedError(reason, field=field)


def _drop_blank_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Treat blank optional text fields as absent."""
    if not isinstance(data, dict):
        return data
    return {
        key: value
        for key, value in data.items()
        if not (
            key in OPTIONAL_TEXT_FIELDS
            and (value is None or (isinstance(value, str) and not value.strip()))
        )
    }


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value.strip() if value is not None else None


def validate_car_input(data: Dict[str, Any], today: Optional[date] = None) -> CarInput:
    """Validate a car form (camelCase keys). Raises ValidationFailedError."""
    _check("car", data)
    today = today or date.today()
    if data["year"] > today.year + 1:
        raise ValidationFailedError("Invalid year", field="year")
    return CarInput(
        make=data["make"].strip(),
        model=data["model"].strip(),
        year=int(data["year"]),
        license_plate=data["licensePlate"].strip(),
        current_mileage=int(data["currentMileage"]),
    )


def validate_service_input(data: Dict[str, Any]) -> ServiceInput:
    """
    Validate a service record form (camelCase keys).

    Besides field shapes this enforces the cross-field rules: a CUSTOM
    service needs a custom label, and a paid service that was not
    self-performed needs an invoice reference.

    Raises ValidationFailedError with the first problem found.
    """
    data = _drop_blank_fields(data)
    _check("serviceRecord", data)

    service_type = ServiceKind[data["serviceType"]]
    is_self_service = data["isSelfService"]
    location = _text(data, "serviceLocation")
    if is_self_service:
        location = SELF_SERVICE_LOCATION

    return ServiceInput(
        service_date=date.fromisoformat(data["serviceDate"]),
        mileage_at_service=int(data["mileageAtService"]),
        service_type=service_type,
        description=data["description"].strip(),
        is_self_service=is_self_service,
        custom_service_type=(
            _text(data, "customServiceType")
            if service_type == ServiceKind.CUSTOM
            else None
        ),
        parts_replaced=_text(data, "partsReplaced"),
        service_location=location,
        service_cost=data.get("serviceCost") or None,
        invoice_url=_text(data, "invoicePhotoUrl"),
        notes=_text(data, "notes"),
    )
