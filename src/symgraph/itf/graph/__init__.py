#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from .graph import Graph  # type: ignore
from .operation import Operation  # type: ignore
