import numpy as np
import pytest

import symgraph.graphs.tensor.op as O
from symgraph.exceptions import EvaluationError, FeedMismatchError
from symgraph.graphs.tensor import SparseTensorValue
from symgraph.itf.exec import Session
from symgraph.runtimes.host import HostSession


def test_run_arithmetic():
    with O.graph(name="arith") as gb:
        x = O.placeholder("float32", [2, 3], name="x")
        y = O.placeholder("float32", [3], name="y")
        z = (x + y) * 2.0 - 1.0
    x_v = np.arange(6, dtype=np.float32).reshape(2, 3)
    y_v = np.array([1.0, 2.0, 3.0], dtype=np.float32)
    sess = HostSession(gb.graph)
    (out,) = sess.run([z], {x: x_v, y: y_v})
    np.testing.assert_allclose(out, (x_v + y_v) * 2.0 - 1.0)
    assert out.dtype == np.float32


def test_integer_division():
    with O.graph(name="division") as gb:
        x = O.placeholder("int32", [3], name="x")
        y = O.placeholder("int32", [3], name="y")
        outs = [x / y, O.div(x, y), x // y, x % y]
    feeds = {x: [-3, 7, 4], y: [2, 2, -3]}
    truediv, div, floordiv, mod = HostSession(gb.graph).run(outs, feeds)
    assert truediv.dtype == np.float64
    np.testing.assert_allclose(truediv, [-1.5, 3.5, -4.0 / 3.0])
    assert div.dtype == np.int32
    np.testing.assert_array_equal(div, [-2, 3, -2])
    np.testing.assert_array_equal(floordiv, [-2, 3, -2])
    np.testing.assert_array_equal(mod, [1, 1, -2])


def test_small_int_truediv():
    with O.graph(name="division") as gb:
        x = O.placeholder("int16", [2], name="x")
        z = x / 2
    (out,) = HostSession(gb.graph).run([z], {x: [1, 3]})
    assert out.dtype == np.float32
    np.testing.assert_allclose(out, [0.5, 1.5])


def test_logical_and_compare():
    with O.graph(name="logical") as gb:
        x = O.placeholder("float32", [4], name="x")
        pos = x > 0.0
        small = x < 2.0
        out = (pos & small) | ~O.equal(x, 3.0)
    (res,) = HostSession(gb.graph).run([out], {x: [-1.0, 1.0, 3.0, 5.0]})
    assert res.dtype == np.bool_
    np.testing.assert_array_equal(res, [True, True, False, True])


def test_string_concat():
    with O.graph(name="strings") as gb:
        x = O.placeholder("string", [2], name="x")
        z = x + "!"
        eq = O.equal(x, "a")
    out, eq_v = HostSession(gb.graph).run([z, eq], {x: ["a", "b"]})
    assert list(out) == ["a!", "b!"]
    np.testing.assert_array_equal(eq_v, [True, False])


def test_abs_and_neg():
    with O.graph(name="unary") as gb:
        c = O.placeholder("complex64", [2], name="c")
        x = O.placeholder("float32", [2], name="x")
        outs = [abs(c), -x]
    mag, neg = HostSession(gb.graph).run(outs, {c: [3 + 4j, -1j], x: [1.0, -2.0]})
    assert mag.dtype == np.float32
    np.testing.assert_allclose(mag, [5.0, 1.0])
    np.testing.assert_allclose(neg, [-1.0, 2.0])


def test_matmul():
    with O.graph(name="matmul") as gb:
        a = O.placeholder("float64", [2, 3], name="A")
        b = O.placeholder("float64", [4, 3], name="B")
        c = O.matmul(a, b, transpose_b=True)
    a_v = np.arange(6.0).reshape(2, 3)
    b_v = np.arange(12.0).reshape(4, 3)
    (out,) = HostSession(gb.graph).run([c], {a: a_v, b: b_v})
    np.testing.assert_allclose(out, a_v @ b_v.T)


def test_matmul_adjoint():
    with O.graph(name="matmul") as gb:
        a = O.placeholder("complex128", [2, 2], name="A")
        b = O.placeholder("complex128", [2, 2], name="B")
        c = O.matmul(a, b, adjoint_a=True)
    a_v = np.array([[1 + 1j, 2], [0, 1j]])
    b_v = np.array([[1, 0], [1j, 1]])
    (out,) = HostSession(gb.graph).run([c], {a: a_v, b: b_v})
    np.testing.assert_allclose(out, a_v.conj().T @ b_v)


def test_sparse_dense_matmul():
    with O.graph(name="sparse") as gb:
        sp = O.sparse_tensor([[0, 0], [1, 2]], [1.0, -2.0], [2, 3])
        b = O.placeholder("float64", [3, 2], name="b")
        c = O.matmul(sp, b)
        d = O.abs(sp)
    b_v = np.arange(6.0).reshape(3, 2)
    with HostSession(gb.graph):
        out = c.eval({b: b_v})
        value = d.eval()
    dense = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, -2.0]])
    np.testing.assert_allclose(out, dense @ b_v)
    assert isinstance(value, SparseTensorValue)
    np.testing.assert_allclose(value.values, [1.0, 2.0])
    np.testing.assert_array_equal(value.dense_shape, [2, 3])


def test_default_session():
    with O.graph(name="default") as gb:
        x = O.constant([1, 2], name="x")
        y = x * 3
    sess = HostSession(gb.graph)
    with sess.as_default():
        assert Session.get_default() is sess
        np.testing.assert_array_equal(y.eval(), [3, 6])
    assert Session.get_default() is None
    np.testing.assert_array_equal(y.eval(session=sess), [3, 6])


def test_feed_intermediate_tensor():
    with O.graph(name="feed") as gb:
        x = O.placeholder("float32", [2], name="x")
        y = x + 1.0
        z = y * 2.0
    (out,) = HostSession(gb.graph).run([z], {y: [1.0, 2.0]})
    np.testing.assert_allclose(out, [2.0, 4.0])


def test_missing_feed():
    with O.graph(name="missing") as gb:
        x = O.placeholder("float32", [2], name="x")
        y = -x
    with pytest.raises(EvaluationError):
        HostSession(gb.graph).run([y])


def test_feed_mismatch():
    with O.graph(name="mismatch") as gb:
        x = O.placeholder("int32", [2], name="x")
        s = O.placeholder("string", [1], name="s")
    sess = HostSession(gb.graph)
    with pytest.raises(FeedMismatchError):
        sess.run([x], {x: [1, 2, 3]})
    with pytest.raises(FeedMismatchError):
        sess.run([x], {x: [1.5, 2.5]})
    with pytest.raises(FeedMismatchError):
        sess.run([s], {s: [1]})
    np.testing.assert_array_equal(sess.run([x], {x: [1, 2]})[0], [1, 2])


def test_fetch_from_other_graph():
    with O.graph(name="g1"):
        x = O.constant(1.0)
    with O.graph(name="g2") as g2:
        pass
    with pytest.raises(EvaluationError):
        HostSession(g2.graph).run([x])


def test_closed_session():
    with O.graph(name="closed") as gb:
        x = O.constant(1.0)
    sess = HostSession(gb.graph)
    sess.close()
    with pytest.raises(EvaluationError):
        sess.run([x])


def test_session_context_closes():
    with O.graph(name="ctx") as gb:
        x = O.constant(1.0)
    with HostSession(gb.graph) as sess:
        assert Session.get_default() is sess
    with pytest.raises(EvaluationError):
        sess.run([x])


def test_kernel_error_wrapped():
    with O.graph(name="overflow") as gb:
        x = O.placeholder("int32", [1], name="x")
        y = x ** -1
    with pytest.raises(EvaluationError):
        HostSession(gb.graph).run([y], {x: [2]})


def test_default_graph_session():
    x = O.placeholder("float32", [1], name="x")
    sess = HostSession()
    assert sess.graph is x.graph
    np.testing.assert_allclose(sess.run([x + 1.0], {x: [1.0]})[0], [2.0])


def test_out_of_range_scalar_evaluation():
    with O.graph(name="narrowing") as gb:
        x = O.placeholder("int8", [1], name="x")
        z = x + 300
    (out,) = HostSession(gb.graph).run([z], {x: [1]})
    assert out.dtype == np.int64
    np.testing.assert_array_equal(out, [301])


def test_array_left_operand_evaluation():
    with O.graph(name="reflected") as gb:
        x = O.placeholder("float64", [2], name="x")
        z = np.array([10.0, 20.0]) - x
    (out,) = HostSession(gb.graph).run([z], {x: [1.0, 2.0]})
    np.testing.assert_allclose(out, [9.0, 18.0])


def test_feed_out_of_range():
    with O.graph(name="feed_range") as gb:
        x = O.placeholder("int8", [1], name="x")
        u = O.placeholder("uint8", [1], name="u")
        f = O.placeholder("float32", [1], name="f")
    sess = HostSession(gb.graph)
    with pytest.raises(FeedMismatchError):
        sess.run([x], {x: [300]})
    with pytest.raises(FeedMismatchError):
        sess.run([u], {u: [-1]})
    with pytest.raises(FeedMismatchError):
        sess.run([f], {f: [1e300]})
    np.testing.assert_array_equal(sess.run([x], {x: [-128]})[0], [-128])
    np.testing.assert_allclose(sess.run([f], {f: [0.1]})[0], [0.1], rtol=1e-6)
