# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Dataset schema and write payload models for the Geckoboard Datasets API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .fields import FieldType, render_field

__all__ = ["NewDataset", "DatasetPayload", "Record"]

Record = Dict[str, Any]


@dataclass
class NewDataset:
    """
    Schema sent when creating (or redeclaring) a dataset.

    :param fields: Mapping of field identifiers to descriptors. The identifier
        is the key used in every record pushed to the dataset.
    :type fields: dict[str, FieldType]
    :param unique_by: Optional ordered list of field identifiers forming the
        key used to merge records on append. The service checks that they
        name declared fields.
    :type unique_by: list[str] or None

    Example::

        dataset = NewDataset(
            fields={
                "name": StringField("Customer"),
                "amount": MoneyField("Amount", currency_code="USD"),
            },
            unique_by=["name"],
        )
    """

    fields: Dict[str, Union[FieldType, Mapping[str, Any]]]
    unique_by: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Datasets API JSON format."""
        result: Dict[str, Any] = {
            "fields": {key: render_field(value) for key, value in self.fields.items()},
        }
        if self.unique_by:
            result["unique_by"] = list(self.unique_by)
        return result


@dataclass
class DatasetPayload:
    """
    Records sent to append to or replace a dataset's data.

    :param data: Ordered records; each maps field identifiers to JSON scalars or ``None``.
    :type data: list[dict[str, Any]]
    :param delete_by: Optional field identifiers used to prune existing records
        when appending. Never sent when replacing data.
    :type delete_by: list[str] or None
    """

    data: List[Record] = field(default_factory=list)
    delete_by: Optional[List[str]] = None

    def to_dict(self, include_delete_by: bool = True) -> Dict[str, Any]:
        """
        Convert to Datasets API JSON format.

        :param include_delete_by: ``True`` for append bodies. ``False`` renders
            a replace body, which only ever carries ``data``.
        :type include_delete_by: bool
        """
        result: Dict[str, Any] = {"data": [dict(record) for record in self.data]}
        if include_delete_by and self.delete_by:
            result["delete_by"] = list(self.delete_by)
        return result
