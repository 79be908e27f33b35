#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeAlias, Any, TYPE_CHECKING
from collections.abc import Sequence, Mapping
from ..data import TensorType, Tensor

if TYPE_CHECKING:
    from .graph import Graph

OperationAttr: TypeAlias = Any
OperationAttrs: TypeAlias = Mapping[str, OperationAttr]


class Operation(ABC):
    """An abstract representation of a node of the graph.

    An Operation records one symbolically requested computation: the type
    tag of the operator that created it, its ordered input tensors, its
    ordered output tensors and their types, its attributes, and the graph
    that owns it. Operations are immutable once constructed, except for the
    refinement of their outputs shapes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the unique name of this operation within its graph.

        Returns:
            The operation name
        """
        ...

    @property
    @abstractmethod
    def type(self) -> str:
        """Returns the type tag of the operator that created this operation.

        Returns:
            The operator type tag
        """
        ...

    @property
    @abstractmethod
    def graph(self) -> Graph:
        """Returns the graph owning this operation.

        Returns:
            The owning graph
        """
        ...

    @property
    @abstractmethod
    def attrs(self) -> OperationAttrs:
        """Returns the dict of attributes for this operation.

        Returns:
            Dict of attributes per name
        """
        ...

    @property
    @abstractmethod
    def inputs(self) -> Sequence[Tensor]:
        """Returns the ordered input tensors of this operation.

        Returns:
            List of input tensors
        """
        ...

    @property
    @abstractmethod
    def outputs(self) -> Sequence[Tensor]:
        """Returns the ordered output tensors of this operation.

        Returns:
            List of output tensors
        """
        ...

    @property
    @abstractmethod
    def outputs_types(self) -> Sequence[TensorType]:
        """Returns the list of output tensors types for this operation.

        Returns:
            List of output tensors types
        """
        ...

    @property
    @abstractmethod
    def num_outputs(self) -> int:
        """Returns the number of outputs of this operation.

        Returns:
            The outputs count
        """
        ...
