#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any
import numpy.typing

from ..data.tensor import TensorType

NDArray = numpy.typing.NDArray[Any]


class Operator(ABC):
    """Semantics attached to an Operation.

    The operator is consulted twice in the life of an operation. When the
    operation is built, forward_types checks the inputs types and derives
    the outputs types, rejecting the construction on failure. When a
    session evaluates the graph, forward maps input arrays to output
    arrays.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Type tag recorded on the operations built with this operator."""
        ...

    @abstractmethod
    def forward_types(self, inputs_types: Sequence[TensorType]) -> Sequence[TensorType]:
        """Derives the outputs types of an operation from its inputs types.

        Raises a GraphConstructionError subclass when a dtype is not
        accepted or when shapes can not be combined.
        """
        ...

    @abstractmethod
    def forward(self, inputs: Sequence[NDArray]) -> Sequence[NDArray]:
        """Computes the outputs values, one array per output slot."""
        ...
