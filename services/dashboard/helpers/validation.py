"""
Validation Gate
---------------
Checks a view's required fields before any URL is built or request is sent.
"""

from typing import List, Mapping, Optional, Sequence

from helpers.errors import ValidationError
from helpers.fields import field_label, field_value
from helpers.views import ViewDescriptor

MISSING_PREFIX = "Missing required fields: "
LABEL_SEPARATOR = ", "


def validate(view: ViewDescriptor, values: Optional[Mapping[str, object]]) -> List[str]:
    """Names of required fields that are blank after trimming (empty list = proceed)."""
    return [name for name in view.required_fields if not field_value(values, name)]


def missing_message(missing: Sequence[str]) -> str:
    return MISSING_PREFIX + LABEL_SEPARATOR.join(field_label(name) for name in missing)


def ensure_valid(view: ViewDescriptor, values: Optional[Mapping[str, object]]) -> None:
    missing = validate(view, values)
    if missing:
        raise ValidationError(missing, missing_message(missing))
