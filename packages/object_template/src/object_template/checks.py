from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .nodes import TplCheck

# YYYY-MM-DDTHH:MM:SS.mmmZ with an optional +HH:MM or -HH:MM suffix.
_ISO_DATE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z([+-]\d{2}:\d{2})?",
    re.ASCII,
)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_iso_date(value: Any) -> bool:
    return isinstance(value, str) and _ISO_DATE_RE.fullmatch(value) is not None


is_string = TplCheck(fn=_is_string, label="is_string")
is_number = TplCheck(fn=_is_number, label="is_number")
is_integer = TplCheck(fn=_is_integer, label="is_integer")
is_boolean = TplCheck(fn=_is_boolean, label="is_boolean")
is_mapping = TplCheck(fn=_is_mapping, label="is_mapping")
is_list = TplCheck(fn=_is_list, label="is_list")
is_iso_date = TplCheck(fn=_is_iso_date, label="is_iso_date")
