#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
# tensor must be imported first, it pulls ops and the operation modules
from .tensor import SymTensor
from .dtype import DType, DTypes, as_dtype
from .shape import TensorShape, as_shape
from .data import SymTensorType
from .operation import TensorOperation
from .graph import TensorGraph
from .context import SymGraphContext, get_default_graph, reset_default_graph
from .builder import graph_builder
from .sparse import SparseTensor, SparseTensorValue
from .ops import *  # noqa: F401,F403
