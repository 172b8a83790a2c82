# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the Geckoboard Datasets client.

- DatasetOperations: dataset lifecycle operations (create, push, replace, delete)
"""

__all__ = []
