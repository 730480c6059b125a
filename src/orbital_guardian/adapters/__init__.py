# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for scenario I/O, external debris catalogs and MILP backends.

External dependencies (json, urllib, scipy, sgp4) are confined to this layer.
"""
