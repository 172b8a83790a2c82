# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the Geckoboard Datasets API.

Create, append to, replace and delete datasets hosted by Geckoboard::

    from geckoboard.datasets import GeckoboardClient, NewDataset, DatasetPayload
    from geckoboard.datasets.models.fields import StringField, NumberField

    client = GeckoboardClient(api_key)
    client.datasets.create("orders", NewDataset(fields={"name": StringField("Name")}))
"""

from .__version__ import __version__
from .client import GeckoboardClient
from .core.config import GeckoboardConfig
from .models.dataset import DatasetPayload, NewDataset

__all__ = [
    "__version__",
    "GeckoboardClient",
    "GeckoboardConfig",
    "NewDataset",
    "DatasetPayload",
]
