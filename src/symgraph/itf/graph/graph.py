#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from abc import ABC, abstractmethod
from collections.abc import Sequence

from .operation import Operation
from ..data import Tensor


class Graph(ABC):
    """An abstract representation of a dataflow graph over symbolic Tensors.

    A Graph owns a set of Operation objects in insertion order. Operation
    names are unique within the graph and the graph is the authority that
    allocates them. Each Tensor is an output of exactly one Operation of
    the graph, and operations may only consume tensors of the same graph.

    A Graph is only a description of the computation, it is evaluated
    through a Session.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the name of this graph.

        Returns:
            The graph's name, possibly empty
        """
        ...

    @property
    @abstractmethod
    def operations(self) -> Sequence[Operation]:
        """Returns all operations of the graph in registration order.

        Returns:
            List of Operation objects
        """
        ...

    @abstractmethod
    def get_operation_by_name(self, name: str) -> Operation:
        """Returns the operation with the given name.

        Args:
            name: The operation name

        Returns:
            The named operation
        """
        ...

    @abstractmethod
    def get_tensor_by_name(self, name: str) -> Tensor:
        """Returns the tensor with the given ``"<op>:<index>"`` name.

        Args:
            name: The tensor name

        Returns:
            The named tensor
        """
        ...

    @abstractmethod
    def unique_name(self, name: str) -> str:
        """Returns a name derived from name and not yet used in the graph.

        Args:
            name: The base name

        Returns:
            A unique operation name
        """
        ...
