"""
Validation rules shared by the API request models.

The back office is used in Kenya: phone numbers must be Kenyan mobile numbers
(``07xx``, ``01xx``, ``2547xx`` or ``+2547xx``) and national ID numbers are 6-8
digits. Optional form fields arrive as empty strings from HTML forms and are
normalized to ``None`` before validation.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, ClassVar, FrozenSet, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, model_validator

KENYAN_PHONE_PATTERN = re.compile(r"^(?:\+254|254|0)[17]\d{8}$")
ID_NUMBER_PATTERN = re.compile(r"^\d{6,8}$")


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only strings as a missing value."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_kenyan_phone(value: str) -> str:
    value = value.strip()
    if not KENYAN_PHONE_PATTERN.match(value):
        raise ValueError("Invalid Kenyan phone number")
    return value


def check_id_number(value: str) -> str:
    value = value.strip()
    if not ID_NUMBER_PATTERN.match(value):
        raise ValueError("ID number must be 6-8 digits")
    return value


KenyanPhone = Annotated[str, AfterValidator(check_kenyan_phone)]
OptionalKenyanPhone = Annotated[Optional[KenyanPhone], BeforeValidator(blank_to_none)]
IdNumber = Annotated[str, AfterValidator(check_id_number)]
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]


class FormModel(BaseModel):
    """Base for request bodies: strips surrounding whitespace and stores enum members as their values."""

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)


class PartialUpdate(FormModel):
    """Base for PATCH bodies: omitted fields are left alone.

    Only the fields named in ``clearable`` may be sent as ``null``; every other
    field maps to a required column.
    """

    clearable: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_required_fields(self):
        nulled = sorted(
            name for name in self.model_fields_set if getattr(self, name) is None and name not in self.clearable
        )
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self
