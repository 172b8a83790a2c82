# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Field descriptors used to declare dataset schemas.

Each class is a typed column declaration understood by the Geckoboard
Datasets API. Descriptors are immutable and render to the JSON mapping the
API expects via ``to_dict()``. :class:`RawField` is the escape hatch for
descriptor shapes not modelled here; its mapping is sent verbatim.

No local validation is performed: names and currency codes are forwarded
as given and any problem is reported by the service.

See: https://developer.geckoboard.com/#field-types
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Union

__all__ = [
    "StringField",
    "DateField",
    "DateTimeField",
    "NumberField",
    "MoneyField",
    "PercentageField",
    "RawField",
    "FieldType",
    "render_field",
]


@dataclass(frozen=True)
class StringField:
    """
    A free-text column.

    :param name: Display name of the column.
    :type name: str
    """

    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Datasets API JSON format."""
        return {"name": self.name, "type": "string"}


@dataclass(frozen=True)
class DateField:
    """
    A calendar date column. Values are sent as ``YYYY-MM-DD`` strings.

    :param name: Display name of the column.
    :type name: str
    """

    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Datasets API JSON format."""
        return {"name": self.name, "type": "date"}


@dataclass(frozen=True)
class DateTimeField:
    """
    A timestamp column. Values must be formatted in ISO 8601.

    :param name: Display name of the column.
    :type name: str
    """

    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Datasets API JSON format."""
        return {"name": self.name, "type": "datetime"}


@dataclass(frozen=True)
class NumberField:
    """
    A numeric column.

    :param name: Display name of the column.
    :type name: str
    :param optional: Whether records may leave this column null.
    :type optional: bool
    """

    name: str
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Datasets API JSON format."""
        return {"name": self.name, "type": "number", "optional": self.optional}


@dataclass(frozen=True)
class MoneyField:
    """
    A monetary column.

    Values are expressed in the smallest denomination of the currency, so
    $10.00 with ``currency_code="USD"`` is sent as ``1000``.

    :param name: Display name of the column.
    :type name: str
    :param currency_code: ISO 4217 code such as ``"USD"``. Sent as given.
    :type currency_code: str
    :param optional: Whether records may leave this column null.
    :type optional: bool
    """

    name: str
    currency_code: str
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Datasets API JSON format."""
        return {
            "name": self.name,
            "type": "money",
            "optional": self.optional,
            "currency_code": self.currency_code,
        }


@dataclass(frozen=True)
class PercentageField:
    """
    A percentage column. Values are fractions, ``0.1`` is shown as 10%.

    :param name: Display name of the column.
    :type name: str
    :param optional: Whether records may leave this column null.
    :type optional: bool
    """

    name: str
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Datasets API JSON format."""
        return {"name": self.name, "type": "percentage", "optional": self.optional}


@dataclass(frozen=True)
class RawField:
    """
    A descriptor given as a plain mapping and sent verbatim.

    :param attributes: The descriptor attributes, e.g. ``{"name": "Duration", "type": "duration", "time_unit": "seconds"}``.
    :type attributes: Mapping[str, Any]
    """

    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> Any:
        return self.attributes.get("name")

    def to_dict(self) -> Dict[str, Any]:
        """Return a copy of the wrapped mapping."""
        return dict(self.attributes)


FieldType = Union[
    StringField,
    DateField,
    DateTimeField,
    NumberField,
    MoneyField,
    PercentageField,
    RawField,
]

_FIELD_CLASSES = (
    StringField,
    DateField,
    DateTimeField,
    NumberField,
    MoneyField,
    PercentageField,
    RawField,
)


def render_field(value: Union[FieldType, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Render a field descriptor to its API mapping.

    A bare mapping is accepted and treated as a :class:`RawField`.

    :raises TypeError: If ``value`` is neither a descriptor nor a mapping.
    """
    if isinstance(value, _FIELD_CLASSES):
        return value.to_dict()
    if isinstance(value, Mapping):
        return RawField(value).to_dict()
    raise TypeError(f"Unsupported field descriptor: {type(value).__name__}")
