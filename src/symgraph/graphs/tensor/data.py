#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing_extensions import override
from typing import Any

from symgraph.itf.data import TensorType

from .dtype import DType, as_dtype
from .shape import TensorShape, as_shape

__all__ = [
    "SymTensorType",
]


class SymTensorType(TensorType):
    def __init__(self, shape: Any = None, dtype: Any = "float32") -> None:
        self._shape = as_shape(shape)
        self._dtype = as_dtype(dtype)

    @property
    @override
    def shape(self) -> TensorShape:
        return self._shape

    @property
    @override
    def dtype(self) -> DType:
        return self._dtype

    @property
    @override
    def ndims(self) -> int | None:
        return self._shape.rank

    def with_shape(self, shape: Any) -> "SymTensorType":
        return SymTensorType(shape=shape, dtype=self._dtype)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymTensorType):
            return NotImplemented
        return self._dtype == other._dtype and self._shape == other._shape

    @override
    def __hash__(self) -> int:
        return hash((self._dtype, self._shape))

    @override
    def __str__(self) -> str:
        return f"{self._dtype}{self._shape}"

    @override
    def __repr__(self) -> str:
        return f"SymTensorType(shape={self._shape!r}, dtype={self._dtype!r})"
