import logging

import pytest

import symgraph.graphs.tensor.op as O
from symgraph.exceptions import (
    DuplicateNameError,
    GraphFinalizedError,
    GraphMismatchError,
    InvalidIndexError,
)
from symgraph.graphs.tensor import (
    TensorGraph,
    SymGraphContext,
    get_default_graph,
    graph_builder,
)
from symgraph.graphs.tensor.utils import SymGraphUtils


def test_default_graph_stack():
    top = get_default_graph()
    assert SymGraphContext.depth == 1
    with O.graph(name="outer") as outer:
        assert get_default_graph() is outer.graph
        with O.graph(name="inner") as inner:
            assert get_default_graph() is inner.graph
            assert SymGraphContext.depth == 3
        assert get_default_graph() is outer.graph
    assert get_default_graph() is top


def test_default_graph_restored_on_error():
    top = get_default_graph()
    with pytest.raises(RuntimeError):
        with O.graph(name="failing"):
            raise RuntimeError("boom")
    assert get_default_graph() is top


def test_as_default():
    graph = TensorGraph(name="g")
    with graph.as_default() as g:
        assert g is graph
        x = O.placeholder("float32", [2])
    assert x.graph is graph
    assert get_default_graph() is not graph


def test_builder_on_existing_graph():
    graph = TensorGraph(name="g")
    with graph_builder(graph=graph) as gb:
        O.placeholder("float32", [2])
    assert gb.graph is graph
    assert len(graph) == 1


def test_operations_in_registration_order():
    with O.graph(name="order") as gb:
        x = O.placeholder("float32", [2], name="x")
        y = O.placeholder("float32", [2], name="y")
        z = x + y
        w = z * x
    graph = gb.graph
    assert [op.name for op in graph.operations] == ["x", "y", "add", "mul"]
    assert [op.name for op in graph] == ["x", "y", "add", "mul"]
    assert z.name == "add:0"
    assert w.op.inputs == (z, x)


def test_unique_names():
    with O.graph(name="names") as gb:
        a = O.placeholder("float32", [2])
        b = O.placeholder("float32", [2])
        c = O.placeholder("float32", [2], name="placeholder_2")
        d = O.placeholder("float32", [2])
    assert a.op.name == "placeholder"
    assert b.op.name == "placeholder_1"
    assert c.op.name == "placeholder_2"
    assert d.op.name == "placeholder_3"
    assert gb.graph.unique_name("add") == "add"
    assert gb.graph.unique_name("add") == "add_1"


def test_duplicate_name():
    with O.graph(name="dup"):
        O.placeholder("float32", [2], name="x")
        with pytest.raises(DuplicateNameError):
            O.placeholder("float32", [2], name="x")


def test_name_scope():
    with O.graph(name="scoped") as gb:
        x = O.placeholder("float32", [2], name="x")
        with gb.graph.name_scope("layer") as scope:
            assert scope == "layer"
            y = x + 1.0
            with gb.graph.name_scope("inner"):
                z = y * 2.0
    assert y.op.name == "layer/add"
    assert z.op.name == "layer/inner/mul"
    assert "layer/add" in gb.graph


def test_lookup_by_name():
    with O.graph(name="lookup") as gb:
        x = O.placeholder("float32", [2], name="x")
        y = O.neg(x, name="y")
    graph = gb.graph
    assert graph.get_operation_by_name("y") is y.op
    assert graph.get_tensor_by_name("y:0") == y
    assert graph.get_tensor_by_name("x:0") == x
    with pytest.raises(KeyError):
        graph.get_operation_by_name("z")
    with pytest.raises(ValueError):
        graph.get_tensor_by_name("y")
    with pytest.raises(InvalidIndexError):
        graph.get_tensor_by_name("y:1")


def test_consumers():
    with O.graph(name="consumers"):
        x = O.placeholder("float32", [2], name="x")
        y = x + x
        z = O.neg(x)
    assert [op.name for op in x.consumers()] == [y.op.name, z.op.name]
    assert y.consumers() == []


def test_graph_mismatch():
    with O.graph(name="g1"):
        x = O.placeholder("float32", [2], name="x")
    with O.graph(name="g2"):
        y = O.placeholder("float32", [2], name="y")
        with pytest.raises(GraphMismatchError):
            x + y


def test_finalized_graph():
    with O.graph(name="final") as gb:
        x = O.placeholder("float32", [2], name="x")
    gb.graph.finalize()
    assert gb.graph.finalized
    with pytest.raises(GraphFinalizedError):
        O.neg(x)
    assert len(gb.graph) == 1


def test_graph_str():
    with O.graph(name="pretty") as gb:
        x = O.placeholder("float32", [2, 3], name="x")
        O.add(x, x, name="y")
    expected = (
        "graph:\n"
        "  name: pretty\n"
        "  inputs:\n"
        "  - x:0\n"
        "  operations:\n"
        "    x: placeholder(dtype=float32, shape=[2, 3]) -> float32[2, 3]\n"
        "    y: add(x:0, x:0) -> float32[2, 3]\n"
    )
    assert str(gb.graph) == expected


def test_empty_graph_str():
    assert str(TensorGraph()) == "graph:\n  inputs: []\n  operations: {}\n"


def test_registration_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="symgraph.graphs.tensor.graph"):
        with O.graph(name="logged"):
            O.placeholder("float32", [2], name="x")
    assert "registered operation x: placeholder" in caplog.text


def test_graph_utils():
    with O.graph(name="utils") as gb:
        x = O.placeholder("float32", [2], name="x")
        y = O.placeholder("float32", [2], name="y")
        a = x + 1.0
        b = O.neg(y)
    graph = gb.graph
    assert SymGraphUtils.get_graph_inputs(graph) == [x, y]
    assert SymGraphUtils.get_graph_outputs(graph) == [a, b]
    ops = SymGraphUtils.get_operations_from_seed(graph, [a])
    assert [op.type for op in ops] == ["placeholder", "constant", "add"]
    ops = SymGraphUtils.get_operations_from_seed(graph, [a], stop=[x])
    assert [op.type for op in ops] == ["constant", "add"]
