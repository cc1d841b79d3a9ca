"""
Flat string form of filter queries stored in ``IssueFilter.data``.

Entries are ``key=value`` pairs joined by ``|``; list values are joined by
``,``. Example: ``statuses=OPEN,REOPENED|componentRoots=struts``.

The format has no escaping. A value containing ``|`` or ``,`` is split on
read, and a one-element list reads back as a plain string.
"""
from typing import Any, Dict, List, Mapping, Optional, Union

from .interfaces import IssueFilterSerializer

SEPARATOR = "|"
KEY_VALUE_SEPARATOR = "="
LIST_SEPARATOR = ","


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _value_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_format_value(v) for v in value if v is not None]
    if isinstance(value, str):
        return [part for part in value.split(LIST_SEPARATOR) if part]
    return [_format_value(value)]


class DefaultIssueFilterSerializer(IssueFilterSerializer):
    """Serializer used when no other implementation is wired in."""

    def serialize(self, params: Mapping[str, Any]) -> str:
        entries = []
        for key, value in params.items():
            if value is None:
                continue
            value_string = LIST_SEPARATOR.join(_value_list(value))
            if value_string:
                entries.append(f"{key}{KEY_VALUE_SEPARATOR}{value_string}")
        return SEPARATOR.join(entries)

    def deserialize(self, data: Optional[str]) -> Dict[str, Union[str, List[str]]]:
        params: Dict[str, Union[str, List[str]]] = {}
        if not data:
            return params
        for entry in data.split(SEPARATOR):
            key, sep, value = entry.partition(KEY_VALUE_SEPARATOR)
            # Malformed entries (no key, no value) are skipped
            if not sep or not key or not value:
                continue
            values = [v for v in value.split(LIST_SEPARATOR) if v]
            if not values:
                continue
            params[key] = values if len(values) > 1 else values[0]
        return params
