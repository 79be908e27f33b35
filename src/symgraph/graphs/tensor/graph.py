#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from typing_extensions import override
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING
import logging
import threading

from symgraph.itf.graph import Graph
from symgraph.exceptions import (
    DuplicateNameError,
    GraphFinalizedError,
    InvalidIndexError,
)

if TYPE_CHECKING:
    from .operation import TensorOperation
    from .tensor import SymTensor

__all__ = [
    "TensorGraph",
]

logger = logging.getLogger(__name__)


class TensorGraph(Graph):
    """Owner of TensorOperation objects, in registration order.

    The graph allocates operation names: a requested name is prefixed by
    the active name scopes and must not be in use, a missing name is
    derived from the operator type tag and made unique with a numeric
    suffix. Registration is serialized by a per graph lock and is refused
    once the graph is finalized.
    """

    def __init__(self, name: str | None = None) -> None:
        self._name = name
        self._operations: list[TensorOperation] = []
        self._ops_by_name: dict[str, TensorOperation] = {}
        self._consumers: dict[SymTensor, list[TensorOperation]] = {}
        self._name_counts: dict[str, int] = {}
        self._name_stack: list[str] = []
        self._finalized = False
        self._lock = threading.RLock()

    @property
    @override
    def name(self) -> str:
        return "" if self._name is None else self._name

    @property
    @override
    def operations(self) -> list[TensorOperation]:
        return list(self._operations)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def finalize(self) -> None:
        self._finalized = True

    def _scoped_name(self, name: str) -> str:
        return "/".join([*self._name_stack, name])

    @override
    def unique_name(self, name: str) -> str:
        with self._lock:
            name = self._scoped_name(name)
            count = self._name_counts.get(name, 0)
            candidate = name if count == 0 else f"{name}_{count}"
            while candidate in self._ops_by_name:
                count += 1
                candidate = f"{name}_{count}"
            self._name_counts[name] = count + 1
            return candidate

    @contextmanager
    def name_scope(self, name: str) -> Iterator[str]:
        assert name and "/" not in name, f"invalid name scope: {name!r}"
        self._name_stack.append(name)
        try:
            yield "/".join(self._name_stack)
        finally:
            self._name_stack.pop()

    def add_operation(self, op: TensorOperation, name: str | None = None) -> str:
        """Registers op and returns the name allocated to it."""
        with self._lock:
            if self._finalized:
                raise GraphFinalizedError(
                    f"graph {self.name!r} is finalized, can't add operation {op.type}"
                )
            if name is None:
                name = self.unique_name(op.type)
            else:
                name = self._scoped_name(name)
                if name in self._ops_by_name:
                    raise DuplicateNameError(
                        f"operation name already used in graph {self.name!r}: {name}"
                    )
            self._operations.append(op)
            self._ops_by_name[name] = op
            for inp in dict.fromkeys(op.inputs):
                self._consumers.setdefault(inp, []).append(op)
        logger.debug("registered operation %s: %s", name, op.type)
        return name

    @override
    def get_operation_by_name(self, name: str) -> TensorOperation:
        op = self._ops_by_name.get(name)
        if op is None:
            raise KeyError(f"operation name not found in graph {self.name!r}: {name}")
        return op

    @override
    def get_tensor_by_name(self, name: str) -> SymTensor:
        op_name, sep, index = name.rpartition(":")
        if not sep or not index.isdigit():
            raise ValueError(f"tensor name must be of the form <op>:<index>: {name}")
        op = self.get_operation_by_name(op_name)
        value_index = int(index)
        if value_index >= op.num_outputs:
            raise InvalidIndexError(
                f"invalid output index {value_index} for operation {op_name} with {op.num_outputs} outputs"
            )
        return op.outputs[value_index]

    def consumers_of(self, tensor: SymTensor) -> list[TensorOperation]:
        return list(self._consumers.get(tensor, []))

    @contextmanager
    def as_default(self) -> Iterator[TensorGraph]:
        from .context import SymGraphContext

        SymGraphContext.push(self)
        try:
            yield self
        finally:
            SymGraphContext.pop(self)

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._ops_by_name

    def __iter__(self) -> Iterator[TensorOperation]:
        return iter(list(self._operations))

    @override
    def __str__(self) -> str:
        graph_str = "graph:\n"
        if self.name != "":
            graph_str += f"  name: {self._name}\n"
        inputs = [op for op in self._operations if op.type == "placeholder"]
        if len(inputs) > 0:
            graph_str += "  inputs:\n"
            for op in inputs:
                graph_str += f"  - {op.outputs[0].name}\n"
        else:
            graph_str += "  inputs: []\n"
        if len(self._operations) > 0:
            graph_str += "  operations:\n"
            for op in self._operations:
                graph_str += f"    {op.name}: {op}\n"
        else:
            graph_str += "  operations: {}\n"
        return graph_str

    @override
    def __repr__(self) -> str:
        return f"<TensorGraph {self.name!r} operations={len(self._operations)}>"
