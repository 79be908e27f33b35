#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
import os

__all__ = [
    "DTYPE_PROMOTION_MODES",
    "get_dtype_promotion",
]

DTYPE_PROMOTION_MODES = ("promote", "strict")


def get_dtype_promotion(mode: str | None = None) -> str:
    """
    Return the dtype promotion mode used by binary operators.
    Raise on unknown mode.
    Defined in order as:
    - passed mode if not None
    - env var SYMGRAPH_DTYPE_PROMOTION
    - "promote"
    In "promote" mode operands dtypes are widened to their common dtype,
    in "strict" mode operands must have the same dtype.
    """
    if mode is None:
        mode = os.environ.get("SYMGRAPH_DTYPE_PROMOTION") or "promote"
    mode = mode.strip().lower()
    if mode not in DTYPE_PROMOTION_MODES:
        raise ValueError(
            f"unknown dtype promotion mode: {mode}, expected one of {DTYPE_PROMOTION_MODES}"
        )
    return mode
