import symgraph.graphs.tensor.op as O


def binary_graph(name, dtype="float32", x_shape=(2, 3), y_shape=(3,), y_dtype=None):
    with O.graph(name=name) as gb:
        x = O.placeholder(dtype, x_shape, name="x")
        y = O.placeholder(y_dtype or dtype, y_shape, name="y")
    return gb.graph, x, y


def matmul_graph(a_shape, b_shape, dtype="float32", b_dtype=None, name="matmul"):
    with O.graph(name=name) as gb:
        a = O.placeholder(dtype, a_shape, name="A")
        b = O.placeholder(b_dtype or dtype, b_shape, name="B")
    return gb.graph, a, b
