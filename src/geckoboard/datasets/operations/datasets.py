# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Dataset lifecycle operations namespace for the Geckoboard Datasets client."""

from __future__ import annotations

import threading
from typing import List, Optional, TYPE_CHECKING

from ..models.dataset import DatasetPayload, NewDataset

if TYPE_CHECKING:
    import pandas as pd

    from ..client import GeckoboardClient


__all__ = ["DatasetOperations"]


class DatasetOperations:
    """Namespace for dataset lifecycle operations.

    Accessed via ``client.datasets``. Every operation blocks until the service
    responds, returns ``None`` on success and raises a
    :class:`~geckoboard.datasets.core.errors.GeckoboardError` otherwise.

    Each operation accepts two keyword arguments bounding the call:

    - ``timeout``: seconds to wait for the service, overriding the configured default.
    - ``cancel_event``: a :class:`threading.Event`; once set, the call raises
      :class:`~geckoboard.datasets.core.errors.TransportError` instead of
      dispatching, or discards the response if the request is already in flight.

    :param client: The parent :class:`~geckoboard.datasets.client.GeckoboardClient` instance.
    :type client: ~geckoboard.datasets.client.GeckoboardClient

    Example::

        client = GeckoboardClient(api_key)

        client.datasets.create(
            "sales.by_day",
            NewDataset(
                fields={"day": DateField("Day"), "amount": MoneyField("Amount", currency_code="USD")},
                unique_by=["day"],
            ),
        )
        client.datasets.push_data(
            "sales.by_day",
            DatasetPayload(data=[{"day": "2024-01-01", "amount": 12500}]),
        )
        client.datasets.delete("sales.by_day")
    """

    def __init__(self, client: GeckoboardClient) -> None:
        self._client = client

    # ----------------------------------------------------------------- create

    def create(
        self,
        dataset_id: str,
        dataset: NewDataset,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Create a dataset, or redeclare an existing one with the same schema.

        Sends ``PUT /datasets/{dataset_id}``.

        :param dataset_id: Dataset identifier, e.g. ``"sales.by_day"``.
        :type dataset_id: :class:`str`
        :param dataset: Field declarations and the optional ``unique_by`` key.
        :type dataset: ~geckoboard.datasets.models.dataset.NewDataset

        :raises ~geckoboard.datasets.core.errors.RequestConflictError:
            If the dataset exists with a different schema.
        :raises ~geckoboard.datasets.core.errors.InvalidRequestError:
            If the service rejects the schema.
        """
        self._client._api._create_dataset(dataset_id, dataset, timeout=timeout, cancel_event=cancel_event)

    # -------------------------------------------------------------- push_data

    def push_data(
        self,
        dataset_id: str,
        payload: DatasetPayload,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Append records to a dataset.

        Sends ``POST /datasets/{dataset_id}/data``. Records matching the
        dataset's ``unique_by`` key are updated in place. When
        ``payload.delete_by`` is set, the service also prunes existing records
        matching on those fields.

        :param dataset_id: Dataset identifier.
        :type dataset_id: :class:`str`
        :param payload: Records to append.
        :type payload: ~geckoboard.datasets.models.dataset.DatasetPayload
        """
        self._client._api._push_data(dataset_id, payload, timeout=timeout, cancel_event=cancel_event)

    # ----------------------------------------------------------- replace_data

    def replace_data(
        self,
        dataset_id: str,
        payload: DatasetPayload,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Replace all records in a dataset.

        Sends ``PUT /datasets/{dataset_id}/data``. ``payload.delete_by`` is
        ignored and never sent.

        :param dataset_id: Dataset identifier.
        :type dataset_id: :class:`str`
        :param payload: The complete new contents of the dataset.
        :type payload: ~geckoboard.datasets.models.dataset.DatasetPayload
        """
        self._client._api._replace_data(dataset_id, payload, timeout=timeout, cancel_event=cancel_event)

    # ----------------------------------------------------------------- delete

    def delete(
        self,
        dataset_id: str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Delete a dataset and all of its data. This cannot be undone.

        Sends ``DELETE /datasets/{dataset_id}``.

        :param dataset_id: Dataset identifier.
        :type dataset_id: :class:`str`
        """
        self._client._api._delete_dataset(dataset_id, timeout=timeout, cancel_event=cancel_event)

    # -------------------------------------------------------------- dataframes

    def push_dataframe(
        self,
        dataset_id: str,
        df: pd.DataFrame,
        *,
        delete_by: Optional[List[str]] = None,
        na_as_null: bool = True,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Append the rows of a DataFrame to a dataset.

        Column labels are used as field identifiers. Requires pandas.

        :param df: Rows to append.
        :type df: ~pandas.DataFrame
        :param delete_by: Optional field identifiers used to prune existing records.
        :type delete_by: list[str] or None
        :param na_as_null: Send missing values as null (default) rather than omitting them.
        :type na_as_null: bool
        """
        from ..utils._pandas import dataframe_to_records

        payload = DatasetPayload(data=dataframe_to_records(df, na_as_null=na_as_null), delete_by=delete_by)
        self.push_data(dataset_id, payload, timeout=timeout, cancel_event=cancel_event)

    def replace_dataframe(
        self,
        dataset_id: str,
        df: pd.DataFrame,
        *,
        na_as_null: bool = True,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Replace all records in a dataset with the rows of a DataFrame.

        Requires pandas.
        """
        from ..utils._pandas import dataframe_to_records

        payload = DatasetPayload(data=dataframe_to_records(df, na_as_null=na_as_null))
        self.replace_data(dataset_id, payload, timeout=timeout, cancel_event=cancel_event)
