#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from typing_extensions import override
from collections.abc import Mapping, Sequence
from typing import Any, TYPE_CHECKING, cast

from symgraph.itf.graph import Operation
from symgraph.exceptions import GraphMismatchError, InvalidArgumentError

from .data import SymTensorType
from .operators import SymOperator
from .shape import TensorShape
from .tensor import SymTensor

if TYPE_CHECKING:
    from .graph import TensorGraph

__all__ = [
    "TensorOperation",
]


class TensorOperation(Operation):
    """A node of a TensorGraph.

    The operation infers its outputs types from its inputs types through
    its operator, registers itself in the graph under a unique name, then
    creates the canonical tensor handle of each output slot.
    """

    def __init__(
        self,
        graph: TensorGraph,
        operator: SymOperator,
        inputs: Sequence[SymTensor],
        name: str | None = None,
    ) -> None:
        inputs = tuple(inputs)
        for inp in inputs:
            if not isinstance(inp, SymTensor):
                raise InvalidArgumentError(
                    f"operation {operator.name} input is not a tensor: {inp!r}"
                )
            if inp.graph is not graph:
                raise GraphMismatchError(
                    f"operation {operator.name} input {inp.name} belongs to another graph"
                )
        outputs_types = operator.forward_types([inp.type for inp in inputs])
        self._graph = graph
        self._operator = operator
        self._inputs = inputs
        self._outputs_types = cast(list[SymTensorType], list(outputs_types))
        self._outputs: list[SymTensor | None] = [None] * len(self._outputs_types)
        self._name = graph.add_operation(self, name)
        for idx, out_type in enumerate(self._outputs_types):
            SymTensor(self, idx, out_type.dtype)

    @property
    @override
    def name(self) -> str:
        return self._name

    @property
    @override
    def type(self) -> str:
        return self._operator.name

    @property
    def operator(self) -> SymOperator:
        return self._operator

    @property
    @override
    def graph(self) -> TensorGraph:
        return self._graph

    @property
    @override
    def attrs(self) -> Mapping[str, Any]:
        return dict(self._operator.attrs.__dict__)

    @property
    @override
    def inputs(self) -> tuple[SymTensor, ...]:
        return self._inputs

    @property
    @override
    def outputs(self) -> tuple[SymTensor, ...]:
        assert all(out is not None for out in self._outputs), (
            f"unbound output for operation {self._name}"
        )
        return tuple(cast(list[SymTensor], self._outputs))

    @property
    @override
    def outputs_types(self) -> tuple[SymTensorType, ...]:
        return tuple(self._outputs_types)

    @property
    @override
    def num_outputs(self) -> int:
        return len(self._outputs_types)

    def output_type(self, value_index: int) -> SymTensorType:
        return self._outputs_types[value_index]

    def _bind_output(self, value_index: int, tensor: SymTensor) -> None:
        if self._outputs[value_index] is not None:
            raise InvalidArgumentError(
                f"output {value_index} of operation {self._name} is already bound"
            )
        self._outputs[value_index] = tensor

    def _refine_output_shape(self, value_index: int, shape: TensorShape) -> None:
        out_type = self._outputs_types[value_index]
        self._outputs_types[value_index] = out_type.with_shape(
            out_type.shape.merge_with(shape)
        )

    @override
    def __str__(self) -> str:
        params = [inp.name for inp in self._inputs]
        params += [f"{attr}={value}" for attr, value in self.attrs.items()]
        args = ", ".join(params)
        outs = ", ".join(str(out_type) for out_type in self._outputs_types)
        return f"{self.type}({args}) -> {outs}"

    @override
    def __repr__(self) -> str:
        return f"<TensorOperation {self._name!r} type={self.type}>"
