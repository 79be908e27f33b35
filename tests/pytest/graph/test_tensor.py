import pytest

import symgraph.graphs.tensor.op as O
from symgraph.exceptions import (
    DTypeMismatchError,
    EvaluationError,
    InvalidArgumentError,
    InvalidIndexError,
    ShapeMismatchError,
)
from symgraph.graphs.tensor import SymTensor, TensorShape


def test_tensor_properties():
    with O.graph(name="props") as gb:
        x = O.placeholder("float32", [2, None], name="x")
    assert x.name == "x:0"
    assert x.value_index == 0
    assert x.graph is gb.graph
    assert x.op.type == "placeholder"
    assert x.dtype.name == "float32"
    assert x.shape == TensorShape([2, None])
    assert x.get_shape() == x.shape
    assert x.ndims == 2
    assert x.device is None
    assert str(x.type) == "float32[2, ?]"
    assert str(x) == "x:0: float32[2, ?]"


def test_unknown_shape_placeholder():
    x = O.placeholder("int32")
    assert x.shape.rank is None
    assert x.ndims is None


def test_output_handle_is_canonical():
    with O.graph(name="canonical"):
        x = O.placeholder("float32", [2], name="x")
    assert x.op.outputs[0] is x
    with pytest.raises(InvalidArgumentError):
        SymTensor(x.op, 0, "float32")
    with pytest.raises(InvalidIndexError):
        SymTensor(x.op, 1, "float32")
    with pytest.raises(DTypeMismatchError):
        SymTensor(x.op, 0, "int32")


def test_handle_equality():
    with O.graph(name="eq"):
        x = O.placeholder("float32", [2], name="x")
        y = O.placeholder("float32", [2], name="y")
    assert x == x.op.outputs[0]
    assert x != y
    assert x.eq(x)
    assert not x.eq(y)
    assert not (x == 1.0)
    assert len({x, x.op.outputs[0], y}) == 2
    assert isinstance(x == y, bool)


def test_no_truth_value():
    x = O.placeholder("bool", [2])
    with pytest.raises(TypeError):
        bool(x)
    with pytest.raises(TypeError):
        if x:
            pass
    with pytest.raises(TypeError):
        iter(x)


def test_set_shape():
    with O.graph(name="set_shape"):
        x = O.placeholder("float32", [None, 3], name="x")
        x.set_shape([4, None])
        assert x.shape == TensorShape([4, 3])
        assert x.op.outputs_types[0].shape == TensorShape([4, 3])
        with pytest.raises(ShapeMismatchError):
            x.set_shape([5, 3])
        y = O.placeholder("float32", name="y")
        y.set_shape([1, 2])
        assert y.shape == TensorShape([1, 2])


def test_eval_without_session():
    x = O.placeholder("float32", [2])
    with pytest.raises(EvaluationError):
        x.eval()


def test_operation_attributes():
    with O.graph(name="attrs"):
        a = O.placeholder("float32", [2, 3], name="a")
        b = O.placeholder("float32", [4, 3], name="b")
        c = O.matmul(a, b, transpose_b=True, name="c")
    op = c.op
    assert op.type == "matmul"
    assert op.num_outputs == 1
    assert op.attrs["transpose_b"] is True
    assert op.attrs["transpose_a"] is False
    assert op.inputs == (a, b)
    assert op.outputs == (c,)
    assert str(op.outputs_types[0]) == "float32[2, 4]"
