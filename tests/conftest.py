# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Geckoboard Datasets tests.

This module provides common test fixtures, mock objects, and configuration
that can be used across all test modules.
"""

import pytest

from geckoboard.datasets.models.dataset import DatasetPayload, NewDataset
from geckoboard.datasets.models.fields import NumberField, StringField

from tests.unit.test_helpers import FakeGeckoboardService


@pytest.fixture
def fake_service():
    """In-memory Datasets API."""
    return FakeGeckoboardService()


@pytest.fixture
def sample_dataset():
    """Schema with a string key and a required number."""
    return NewDataset(
        fields={"name": StringField("name"), "amount": NumberField("amount", optional=False)},
        unique_by=["name"],
    )


@pytest.fixture
def sample_payload():
    """Two records sharing the same unique key."""
    return DatasetPayload(
        data=[
            {"name": "a", "amount": 1},
            {"name": "a", "amount": 2},
        ]
    )
