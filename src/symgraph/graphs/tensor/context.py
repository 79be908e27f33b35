#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from .graph import TensorGraph


__all__ = [
    "SymGraphContext",
    "get_default_graph",
    "reset_default_graph",
]


class SymGraphScopes:
    """Stack of default graphs.

    The bottom of the stack is the top level graph created at import,
    graphs are pushed and popped around graph building scopes. The stack
    is shared by all threads, a graph is expected to be built by one
    thread at a time.
    """

    _graphs: list[TensorGraph]

    def __init__(self) -> None:
        self._graphs = [TensorGraph()]

    def push(self, graph: TensorGraph) -> None:
        self._graphs.append(graph)

    def pop(self, graph: TensorGraph | None = None) -> TensorGraph:
        assert len(self._graphs) > 1, "can't pop the top level graph"
        popped = self._graphs.pop()
        assert graph is None or popped is graph, (
            f"default graph stack corrupted: {popped!r} is not {graph!r}"
        )
        return popped

    @property
    def current(self) -> TensorGraph:
        return self._graphs[-1]

    @property
    def depth(self) -> int:
        return len(self._graphs)

    def reset(self) -> TensorGraph:
        assert len(self._graphs) == 1, "can't reset the default graph inside a graph scope"
        self._graphs = [TensorGraph()]
        return self._graphs[0]


SymGraphContext = SymGraphScopes()


def get_default_graph() -> TensorGraph:
    return SymGraphContext.current


def reset_default_graph() -> TensorGraph:
    return SymGraphContext.reset()
