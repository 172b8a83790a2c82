# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the Geckoboard Datasets client.

- :mod:`~geckoboard.datasets.models.fields`: Field descriptors for dataset schemas.
- :mod:`~geckoboard.datasets.models.dataset`: Dataset schema and write payloads.

Import models directly from the specific module files.
"""

__all__ = []
