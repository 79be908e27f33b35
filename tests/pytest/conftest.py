import pytest

from symgraph.graphs.tensor import reset_default_graph


@pytest.fixture(autouse=True)
def fresh_default_graph():
    reset_default_graph()
    yield
    reset_default_graph()
