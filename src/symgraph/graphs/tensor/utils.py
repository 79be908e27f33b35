#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from collections.abc import Iterable

from .graph import TensorGraph
from .operation import TensorOperation
from .tensor import SymTensor


__all__ = [
    "SymGraphUtils",
]


class SymGraphUtils:
    @staticmethod
    def get_operations_from_seed(
        graph: TensorGraph,
        seed: Iterable[SymTensor],
        stop: Iterable[SymTensor] = (),
    ) -> list[TensorOperation]:
        """
        Return the operations needed to compute the seed tensors,
        in graph registration order, which is a topological order.
        Tensors in stop are considered computed.
        """
        stop_set = set(stop)
        seen: set[TensorOperation] = set()
        stack = [tensor for tensor in seed if tensor not in stop_set]
        while stack:
            tensor = stack.pop()
            op = tensor.op
            if op in seen:
                continue
            seen.add(op)
            for inp in op.inputs:
                if inp not in stop_set and inp.op not in seen:
                    stack.append(inp)
        return [op for op in graph.operations if op in seen]

    @staticmethod
    def get_graph_inputs(graph: TensorGraph) -> list[SymTensor]:
        return [op.outputs[0] for op in graph.operations if op.type == "placeholder"]

    @staticmethod
    def get_graph_outputs(graph: TensorGraph) -> list[SymTensor]:
        """Return the tensors without consumers, in registration order."""
        return [
            out
            for op in graph.operations
            for out in op.outputs
            if len(graph.consumers_of(out)) == 0
        ]
