#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, ClassVar
import numpy.typing

from ..data import Tensor
from ..graph import Graph


class Session(ABC):
    """An abstract representation of a graph execution environment.

    A Session evaluates tensors of a Graph. Placeholders are given values
    through a feed dict mapping tensors to values, and fetched tensors are
    returned as arrays. Evaluation failures raise EvaluationError, fed
    values not matching the placeholder type raise FeedMismatchError.

    A Session can be installed as the default session, used by
    ``Tensor.eval`` when no session is given, with ``as_default()``.
    """

    _default_stack: ClassVar[list[Session]] = []

    @property
    @abstractmethod
    def graph(self) -> Graph:
        """Returns the graph evaluated by this session.

        Returns:
            The session's graph
        """
        ...

    @abstractmethod
    def run(
        self,
        fetches: Sequence[Tensor],
        feed_dict: Mapping[Tensor, Any] | None = None,
    ) -> list[numpy.typing.NDArray[Any]]:
        """Evaluates the fetched tensors.

        Args:
            fetches: List of tensors to evaluate
            feed_dict: Mapping of tensors to fed values

        Returns:
            List of values, one per fetched tensor
        """
        ...

    def close(self) -> None:
        """Releases the resources held by the session."""
        pass

    @contextmanager
    def as_default(self) -> Iterator[Session]:
        self._default_stack.append(self)
        try:
            yield self
        finally:
            popped = self._default_stack.pop()
            assert popped is self, "default session stack corrupted"

    @classmethod
    def get_default(cls) -> Session | None:
        return cls._default_stack[-1] if cls._default_stack else None

    def __enter__(self) -> Session:
        self._default_stack.append(self)
        return self

    def __exit__(self, *_: Any) -> None:
        popped = self._default_stack.pop()
        assert popped is self, "default session stack corrupted"
        self.close()
