#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..graph import Graph, Operation
    from ..exec import Session


class TensorType(ABC):
    """An abstract representation of a tensor's type information.

    TensorType pairs the element data type of a tensor with its best known
    shape. The shape may be partially known (some dimensions unknown) or
    fully unknown (unknown rank). Type inference over the graph operates on
    TensorType values only, no data is involved.
    """

    @property
    @abstractmethod
    def shape(self) -> Any:
        """Returns the tensor's shape.

        Returns:
            The shape descriptor, possibly partially known
        """
        ...

    @property
    @abstractmethod
    def dtype(self) -> Any:
        """Returns the tensor's element data type.

        Returns:
            The data type of the tensor elements
        """
        ...

    @property
    @abstractmethod
    def ndims(self) -> int | None:
        """Returns the number of dimensions in the tensor.

        Returns:
            The tensor's rank, or None when unknown
        """
        ...


class Tensor(ABC):
    """An abstract representation of one output of a graph Operation.

    A Tensor is a symbolic handle: it identifies the output slot
    ``value_index`` of the Operation ``op`` and never holds data itself.
    Its dtype and shape are those declared by the operation for that slot.
    Concrete values are only obtained by evaluating the tensor with a
    Session.
    """

    @property
    @abstractmethod
    def op(self) -> Operation:
        """Returns the operation producing this tensor.

        Returns:
            The producing Operation
        """
        ...

    @property
    @abstractmethod
    def value_index(self) -> int:
        """Returns the index of this tensor in the outputs of its operation.

        Returns:
            The output slot index
        """
        ...

    @property
    @abstractmethod
    def graph(self) -> Graph:
        """Returns the graph owning the producing operation.

        Returns:
            The owning Graph
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the name of this tensor, as ``"<op name>:<value index>"``.

        Returns:
            The tensor name, unique within its graph
        """
        ...

    @property
    @abstractmethod
    def type(self) -> TensorType:
        """Returns the tensor's type information.

        Returns:
            The type descriptor containing shape and dtype information
        """
        ...

    @abstractmethod
    def consumers(self) -> list[Operation]:
        """Returns the operations consuming this tensor.

        Returns:
            The consuming operations, in graph registration order
        """
        ...

    @abstractmethod
    def set_shape(self, shape: Any) -> None:
        """Refines the shape of this tensor.

        The given shape is merged with the current one, it can only make
        the shape more specific.

        Args:
            shape: The shape to merge into the current shape
        """
        ...

    @abstractmethod
    def eval(
        self, feed_dict: dict[Tensor, Any] | None = None, session: Session | None = None
    ) -> Any:
        """Evaluates this tensor in a Session.

        Args:
            feed_dict: Mapping of tensors to fed values
            session: The session to use, the default session when None

        Returns:
            The value of this tensor
        """
        ...
