from __future__ import annotations

import re

"""Class name canonicalization.

The ticketing export repeats compound class names ("ONLY YAMS - ONLY YAMS")
and appends capacity annotations ("TRAP MOBILITY @ 24"). Only those two shapes
are repaired; anything else passes through trimmed.
"""

__all__ = [
    "SEPARATOR",
    "clean_class_name",
]

SEPARATOR = " - "
_CAPACITY_SUFFIX = re.compile(r"\s*@\s*\d+\s*$")


def clean_class_name(class_name: str) -> str:
    """Canonicalize a raw line item name.

    Idempotent for the repaired shapes. A name whose halves are themselves
    doubled ("A - A - A - A") loses one level per call.
    """
    cleaned = _CAPACITY_SUFFIX.sub("", class_name)

    parts = cleaned.split(SEPARATOR)
    if len(parts) == 2 and parts[0].strip().lower() == parts[1].strip().lower():
        cleaned = parts[0].strip()
    elif len(parts) == 4:
        first_half = parts[0].strip() + SEPARATOR + parts[1].strip()
        second_half = parts[2].strip() + SEPARATOR + parts[3].strip()
        if first_half.lower() == second_half.lower():
            cleaned = first_half

    return cleaned.strip()
