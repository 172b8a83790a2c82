# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Low-level request pipeline for the Datasets API."""
