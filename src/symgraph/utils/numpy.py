#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing import Any
import numpy as np
import numpy.typing


def np_cast_exact(
    array: numpy.typing.NDArray[Any], dtype: Any
) -> numpy.typing.NDArray[Any] | None:
    """
    Cast array to dtype of the same kind, or return None
    when some value is not preserved.
    Integer and bool targets must hold every value exactly,
    floating point targets may round but must not overflow.
    """
    if not np.can_cast(array.dtype, dtype, casting="same_kind"):
        return None
    with np.errstate(over="ignore", invalid="ignore"):
        cast = array.astype(dtype)
    kind = cast.dtype.kind
    if kind in ("b", "i", "u"):
        if not np.array_equal(cast, array):
            return None
    elif kind in ("f", "c"):
        if array.dtype.kind in ("f", "c"):
            overflow = np.isfinite(array) & ~np.isfinite(cast)
        else:
            overflow = ~np.isfinite(cast)
        if np.any(overflow):
            return None
    return cast
