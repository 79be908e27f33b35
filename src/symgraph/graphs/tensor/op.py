#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing import Any

from .builder import graph_builder
from .context import get_default_graph
from .data import SymTensorType
from .dtype import as_dtype
from .shape import as_shape
from .sparse import SparseTensor
from .ops import *  # noqa: F401,F403
from .ops import __all__ as _ops_all

__all__ = [
    *_ops_all,
    "graph",
    "default_graph",
    "sparse_tensor",
    "type",
    "dtype",
    "shape",
]


def graph(name: str | None = None) -> graph_builder:
    return graph_builder(name=name)


def default_graph() -> Any:
    return get_default_graph()


def sparse_tensor(indices: Any, values: Any, dense_shape: Any) -> SparseTensor:
    return SparseTensor(indices, values, dense_shape)


def type(*args: Any, **attrs: Any) -> SymTensorType:
    return SymTensorType(*args, **attrs)


def dtype(value: Any) -> Any:
    return as_dtype(value)


def shape(value: Any) -> Any:
    return as_shape(value)
