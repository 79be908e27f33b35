#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing import Any
import numpy as np

from symgraph.exceptions import (
    DTypeError,
    DTypeMismatchError,
    GraphMismatchError,
    InvalidArgumentError,
)
from symgraph.utils.numpy import np_cast_exact

from .context import get_default_graph
from .data import SymTensorType
from .dtype import DType, as_dtype
from .graph import TensorGraph
from .operation import TensorOperation
from .operators import SymOperPlaceholder, SymOperConstant
from .shape import as_shape
from .tensor import SymTensor

__all__ = [
    "placeholder",
    "constant",
    "convert_to_tensor",
]


def placeholder(
    dtype: Any,
    shape: Any = None,
    name: str | None = None,
    graph: TensorGraph | None = None,
) -> SymTensor:
    """Creates a graph input, its value must be fed at evaluation."""
    graph = graph if graph is not None else get_default_graph()
    type = SymTensorType(shape=as_shape(shape), dtype=dtype)
    op = TensorOperation(graph, SymOperPlaceholder(type), [], name=name)
    return op.outputs[0]


def _as_array(value: Any, dtype: DType | None, dtype_hint: DType | None) -> np.ndarray:
    if dtype is not None:
        np_dtype = dtype.as_numpy_dtype
        try:
            return np.asarray(value, dtype=np_dtype)
        except (TypeError, ValueError) as e:
            raise DTypeError(f"can't convert {value!r} to dtype {dtype}") from e
    array = np.asarray(value)
    if array.dtype.kind in ("U", "S"):
        array = array.astype(np.object_)
    if dtype_hint is not None:
        cast = np_cast_exact(array, dtype_hint.as_numpy_dtype)
        if cast is not None:
            array = cast
    return array


def constant(
    value: Any,
    dtype: Any = None,
    shape: Any = None,
    name: str | None = None,
    graph: TensorGraph | None = None,
    dtype_hint: Any = None,
) -> SymTensor:
    """Creates a constant tensor holding value.

    When shape is given, a scalar value is broadcast to it, other values
    are reshaped to it. When dtype is not given, it is inferred from the
    value, dtype_hint being used when the value can be cast to it.
    """
    graph = graph if graph is not None else get_default_graph()
    array = _as_array(
        value,
        None if dtype is None else as_dtype(dtype),
        None if dtype_hint is None else as_dtype(dtype_hint),
    )
    if shape is not None:
        target = as_shape(shape)
        if not target.is_fully_defined():
            raise InvalidArgumentError(f"constant shape must be fully defined: {target}")
        dims = tuple(target.as_list())
        if array.ndim == 0:
            array = np.full(dims, array, dtype=array.dtype)
        elif array.size == target.num_elements():
            array = array.reshape(dims)
        else:
            raise InvalidArgumentError(
                f"can't reshape constant of {array.size} elements to {target}"
            )
    op = TensorOperation(graph, SymOperConstant(array, as_dtype(array.dtype)), [], name=name)
    return op.outputs[0]


def convert_to_tensor(
    value: Any,
    dtype: Any = None,
    graph: TensorGraph | None = None,
    name: str | None = None,
    dtype_hint: Any = None,
) -> SymTensor:
    """Returns value as a tensor, creating a constant for non tensor values."""
    if isinstance(value, SymTensor):
        if dtype is not None and as_dtype(dtype) != value.dtype:
            raise DTypeMismatchError(
                f"tensor {value.name} of dtype {value.dtype} can't be used as {as_dtype(dtype)}"
            )
        if graph is not None and value.graph is not graph:
            raise GraphMismatchError(f"tensor {value.name} belongs to another graph")
        return value
    return constant(value, dtype=dtype, name=name, graph=graph, dtype_hint=dtype_hint)
