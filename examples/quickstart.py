# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import os
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from geckoboard.datasets import DatasetPayload, GeckoboardClient, NewDataset
from geckoboard.datasets.core.config import GeckoboardConfig
from geckoboard.datasets.core.errors import BadCredentialsError, GeckoboardError
from geckoboard.datasets.core.telemetry import TelemetryConfig
from geckoboard.datasets.models.fields import DateField, MoneyField, StringField

api_key = os.environ.get("GECKOBOARD_API_KEY", "").strip()
if not api_key:
    print("Set GECKOBOARD_API_KEY to run this quickstart.")
    sys.exit(1)

config = GeckoboardConfig(telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG"))

try:
    client = GeckoboardClient.with_user_agent(api_key, "geckoboard-datasets-quickstart", config=config)
except BadCredentialsError:
    print("The API key was rejected.")
    sys.exit(1)

dataset_id = "quickstart.transactions"

try:
    client.datasets.create(
        dataset_id,
        NewDataset(
            fields={
                "target": StringField("Transaction target"),
                "amount": MoneyField("Amount", currency_code="USD"),
                "date": DateField("Date"),
            },
            unique_by=["target"],
        ),
    )
    print(f"Created {dataset_id}")

    client.datasets.push_data(
        dataset_id,
        DatasetPayload(
            data=[
                {"target": "Waxon Butter", "amount": 30000, "date": "2024-01-01"},
                {"target": "Shred Lack", "amount": 130000, "date": "2024-01-02"},
            ]
        ),
    )
    print("Pushed 2 records")

    client.datasets.replace_data(
        dataset_id,
        DatasetPayload(data=[{"target": "Creg Washer", "amount": 50000, "date": "2024-01-03"}]),
    )
    print("Replaced data with 1 record")
finally:
    try:
        client.datasets.delete(dataset_id)
        print(f"Deleted {dataset_id}")
    except GeckoboardError as ex:
        print(f"Cleanup failed: {ex.to_dict()}")
