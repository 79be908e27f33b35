#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing import Any

from .graph import TensorGraph
from .context import SymGraphContext


class graph_builder:
    def __init__(self, name: str | None = None, graph: TensorGraph | None = None) -> None:
        self._graph = graph if graph is not None else TensorGraph(name=name)

    def __enter__(self) -> "graph_builder":
        SymGraphContext.push(self._graph)
        return self

    def __exit__(self, *_: Any) -> None:
        SymGraphContext.pop(self._graph)

    @property
    def graph(self) -> TensorGraph:
        return self._graph
