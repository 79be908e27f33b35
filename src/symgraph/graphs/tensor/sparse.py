#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from typing_extensions import override
from collections.abc import Mapping
from typing import Any, NamedTuple
import numpy as np

from symgraph.itf.exec import Session
from symgraph.exceptions import (
    DTypeError,
    GraphMismatchError,
    ShapeMismatchError,
    EvaluationError,
)

from .dtype import DType
from .graph import TensorGraph
from .operators import SymOperConstant
from .shape import TensorShape
from .sources import convert_to_tensor
from .tensor import SymTensor

__all__ = [
    "SparseTensor",
    "SparseTensorValue",
]


class SparseTensorValue(NamedTuple):
    indices: np.ndarray
    values: np.ndarray
    dense_shape: np.ndarray


class SparseTensor:
    """Sparse representation of a tensor, in coordinate format.

    ``indices`` is an int64 tensor of shape [N, rank] holding the
    coordinates of the N non-zero elements, ``values`` is a tensor of shape
    [N] holding their values and ``dense_shape`` is an int64 tensor of
    shape [rank]. The three components belong to the same graph.
    """

    def __init__(self, indices: Any, values: Any, dense_shape: Any) -> None:
        graph = next(
            (
                comp.graph
                for comp in (indices, values, dense_shape)
                if isinstance(comp, SymTensor)
            ),
            None,
        )
        self._values = convert_to_tensor(values, graph=graph)
        graph = self._values.graph
        self._indices = convert_to_tensor(indices, graph=graph, dtype_hint="int64")
        self._dense_shape = convert_to_tensor(dense_shape, graph=graph, dtype_hint="int64")
        for comp in (self._indices, self._dense_shape):
            if comp.graph is not graph:
                raise GraphMismatchError(
                    f"sparse tensor component {comp.name} belongs to another graph"
                )
            if comp.dtype.name != "int64":
                raise DTypeError(
                    f"sparse tensor component {comp.name} must be int64, got {comp.dtype}"
                )
        indices_shape = self._indices.shape.with_rank(2)
        values_shape = self._values.shape.with_rank(1)
        dense_shape_shape = self._dense_shape.shape.with_rank(1)
        try:
            indices_shape[:1].merge_with(values_shape)
            indices_shape[1:].merge_with(dense_shape_shape)
        except ShapeMismatchError as e:
            raise ShapeMismatchError(
                f"sparse tensor components shapes mismatch: indices {indices_shape}, "
                f"values {values_shape}, dense_shape {dense_shape_shape}"
            ) from e

    @property
    def indices(self) -> SymTensor:
        return self._indices

    @property
    def values(self) -> SymTensor:
        return self._values

    @property
    def dense_shape(self) -> SymTensor:
        return self._dense_shape

    @property
    def dtype(self) -> DType:
        return self._values.dtype

    @property
    def graph(self) -> TensorGraph:
        return self._values.graph

    @property
    def shape(self) -> TensorShape:
        operator = self._dense_shape.op.operator
        if isinstance(operator, SymOperConstant):
            return TensorShape([int(d) for d in operator.value])
        rank = self._dense_shape.shape[0]
        if rank is None:
            return TensorShape.unknown()
        return TensorShape.unknown_of_rank(rank)

    def get_shape(self) -> TensorShape:
        return self.shape

    def with_values(self, values: SymTensor) -> SparseTensor:
        return SparseTensor(self._indices, values, self._dense_shape)

    def eval(
        self,
        feed_dict: Mapping[Any, Any] | None = None,
        session: Session | None = None,
    ) -> SparseTensorValue:
        if session is None:
            session = Session.get_default()
        if session is None:
            raise EvaluationError("no session given and no default session to evaluate sparse tensor")
        indices, values, dense_shape = session.run(
            [self._indices, self._values, self._dense_shape], feed_dict
        )
        return SparseTensorValue(indices, values, dense_shape)

    def __bool__(self) -> bool:
        raise TypeError("symbolic sparse tensor has no truth value")

    @override
    def __repr__(self) -> str:
        return (
            f"SparseTensor(indices={self._indices.name}, values={self._values.name}, "
            f"dense_shape={self._dense_shape.name})"
        )
