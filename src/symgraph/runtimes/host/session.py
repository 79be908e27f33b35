#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing_extensions import override
from collections.abc import Mapping, Sequence
from typing import Any
import logging
import numpy as np
import numpy.typing

from symgraph.itf.data import Tensor
from symgraph.itf.exec import Session
from symgraph.exceptions import EvaluationError, FeedMismatchError
from symgraph.graphs.tensor import SymTensor, TensorGraph, get_default_graph
from symgraph.graphs.tensor.utils import SymGraphUtils
from symgraph.utils.numpy import np_cast_exact

__all__ = [
    "HostSession",
]

logger = logging.getLogger(__name__)

NDArray = numpy.typing.NDArray[Any]


class HostSession(Session):
    """Reference session evaluating a graph with numpy on the host.

    Operations needed by the fetched tensors are evaluated in graph
    registration order, each with its operator kernel. Fed tensors are not
    recomputed, any tensor of the graph can be fed.
    """

    def __init__(self, graph: TensorGraph | None = None) -> None:
        self._graph = graph if graph is not None else get_default_graph()
        self._closed = False

    @property
    @override
    def graph(self) -> TensorGraph:
        return self._graph

    @override
    def close(self) -> None:
        self._closed = True

    def _check_tensor(self, tensor: Any, what: str) -> SymTensor:
        if not isinstance(tensor, SymTensor):
            raise EvaluationError(f"{what} is not a tensor: {tensor!r}")
        if tensor.graph is not self._graph:
            raise EvaluationError(f"{what} {tensor.name} is not in the session graph")
        return tensor

    def _feed_value(self, tensor: SymTensor, value: Any) -> NDArray:
        dtype = tensor.dtype
        try:
            array = np.asarray(value)
        except (TypeError, ValueError) as e:
            raise FeedMismatchError(f"invalid value fed for {tensor.name}: {e}") from e
        if dtype.is_string:
            if array.dtype.kind not in ("U", "S", "O"):
                raise FeedMismatchError(
                    f"value of dtype {array.dtype} fed for {tensor.name} of dtype {dtype}"
                )
        else:
            cast = np_cast_exact(array, dtype.as_numpy_dtype)
            if cast is None:
                raise FeedMismatchError(
                    f"value of dtype {array.dtype} fed for {tensor.name} of dtype {dtype} does not fit"
                )
            array = cast
        if not tensor.shape.is_compatible_with(array.shape):
            raise FeedMismatchError(
                f"value of shape {list(array.shape)} fed for {tensor.name} of shape {tensor.shape}"
            )
        return array.astype(dtype.as_numpy_dtype)

    def _output_value(self, tensor: SymTensor, value: NDArray) -> NDArray:
        if not tensor.shape.is_compatible_with(value.shape):
            raise EvaluationError(
                f"value of shape {list(value.shape)} computed for {tensor.name} of shape {tensor.shape}"
            )
        return value.astype(tensor.dtype.as_numpy_dtype, copy=False)

    @override
    def run(
        self,
        fetches: Sequence[Tensor],
        feed_dict: Mapping[Tensor, Any] | None = None,
    ) -> list[NDArray]:
        if self._closed:
            raise EvaluationError("attempted to use a closed session")
        fetched = [self._check_tensor(t, "fetch") for t in fetches]
        values: dict[SymTensor, NDArray] = {}
        for tensor, value in (feed_dict or {}).items():
            tensor = self._check_tensor(tensor, "feed")
            values[tensor] = self._feed_value(tensor, value)
        ops = SymGraphUtils.get_operations_from_seed(
            self._graph, fetched, stop=list(values)
        )
        logger.debug(
            "running %d operations for %d fetches, %d feeds",
            len(ops),
            len(fetched),
            len(values),
        )
        for op in ops:
            if all(out in values for out in op.outputs):
                continue
            if op.type == "placeholder":
                raise EvaluationError(
                    f"placeholder {op.outputs[0].name} must be fed"
                )
            inputs = [values[inp] for inp in op.inputs]
            try:
                outputs = op.operator.forward(inputs)
            except EvaluationError:
                raise
            except (ArithmeticError, ValueError, TypeError) as e:
                raise EvaluationError(f"failed to evaluate operation {op.name}: {e}") from e
            for out, value in zip(op.outputs, outputs):
                if out not in values:
                    values[out] = self._output_value(out, np.asarray(value))
        return [values[t] for t in fetched]
