import pytest

from symgraph.exceptions import ShapeMismatchError, RankError
from symgraph.graphs.tensor import TensorShape, as_shape


def test_unknown_and_scalar():
    unknown = TensorShape.unknown()
    assert unknown.rank is None
    assert unknown.dims is None
    assert not unknown.is_fully_defined()
    assert str(unknown) == "<unknown>"
    scalar = TensorShape.scalar()
    assert scalar.rank == 0
    assert scalar.is_fully_defined()
    assert scalar.num_elements() == 1


def test_dims_queries():
    shape = TensorShape([3, None, 5])
    assert shape.rank == 3
    assert len(shape) == 3
    assert shape[0] == 3
    assert shape[1] is None
    assert shape[-1] == 5
    assert shape[1:] == TensorShape([None, 5])
    assert shape.as_list() == [3, None, 5]
    assert shape.num_elements() is None
    assert str(shape) == "[3, ?, 5]"
    assert TensorShape([2, 3]).num_elements() == 6


def test_unknown_rank_queries_raise():
    with pytest.raises(ValueError):
        TensorShape.unknown().as_list()
    with pytest.raises(ValueError):
        len(TensorShape.unknown())


def test_invalid_dimension():
    with pytest.raises(ShapeMismatchError):
        TensorShape([2, -1])
    with pytest.raises(ShapeMismatchError):
        TensorShape(["a"])


def test_equality():
    assert TensorShape([1, None]) == TensorShape([1, None])
    assert TensorShape([1, 2]) == (1, 2)
    assert TensorShape([1, None]) == [1, None]
    assert TensorShape([1, 2]) != TensorShape([1, 3])
    assert TensorShape.unknown() == TensorShape.unknown()
    assert TensorShape.unknown() != TensorShape.scalar()
    assert len({TensorShape([1, 2]), TensorShape((1, 2))}) == 1


def test_as_shape():
    assert as_shape(4) == TensorShape([4])
    assert as_shape(None) == TensorShape.unknown()
    shape = TensorShape([2])
    assert as_shape(shape) is shape


def test_merge_known_and_unknown():
    merged = TensorShape([3, None]).merge_with(TensorShape([None, 4]))
    assert merged == TensorShape([3, 4])


def test_merge_conflict():
    with pytest.raises(ShapeMismatchError):
        TensorShape([3, 5]).merge_with(TensorShape([3, 6]))


def test_merge_rank_conflict():
    with pytest.raises(ShapeMismatchError):
        TensorShape([3]).merge_with(TensorShape([3, 1]))


@pytest.mark.parametrize(
    "dims", [None, (), (3,), (3, None), (None, None, 2)]
)
def test_merge_idempotent(dims):
    shape = TensorShape(dims)
    assert shape.merge_with(shape) == shape


@pytest.mark.parametrize("dims", [(), (3, None), (1, 2, 3)])
def test_merge_unknown_identity(dims):
    shape = TensorShape(dims)
    assert TensorShape.unknown().merge_with(shape) == shape
    assert shape.merge_with(TensorShape.unknown()) == shape


def test_merge_associative():
    a = TensorShape([None, 2, None])
    b = TensorShape([1, None, None])
    c = TensorShape([None, None, 3])
    assert a.merge_with(b).merge_with(c) == a.merge_with(b.merge_with(c))
    assert a.merge_with(b).merge_with(c) == TensorShape([1, 2, 3])


def test_compatibility():
    assert TensorShape([None, 3]).is_compatible_with([2, 3])
    assert TensorShape.unknown().is_compatible_with([2, 3])
    assert not TensorShape([2, 3]).is_compatible_with([2, 4])
    assert not TensorShape([2, 3]).is_compatible_with([2, 3, 1])


@pytest.mark.parametrize(
    "lhs, rhs, expected",
    [
        ((2, 3), (3,), (2, 3)),
        ((2, 1, 3), (4, 1), (2, 4, 3)),
        ((None, 3), (1,), (None, 3)),
        ((None,), (4,), (4,)),
        ((1,), (None,), (None,)),
        ((), (2, 2), (2, 2)),
        ((5, 1), (1, 6), (5, 6)),
    ],
)
def test_broadcast(lhs, rhs, expected):
    assert TensorShape(lhs).broadcast_with(TensorShape(rhs)) == TensorShape(expected)
    assert TensorShape(rhs).broadcast_with(TensorShape(lhs)) == TensorShape(expected)


def test_broadcast_unknown_rank():
    assert TensorShape([2, 3]).broadcast_with(TensorShape.unknown()).rank is None
    assert TensorShape.unknown().broadcast_with([2]).rank is None


def test_broadcast_mismatch():
    with pytest.raises(ShapeMismatchError):
        TensorShape([2, 3]).broadcast_with(TensorShape([4]))
    assert not TensorShape([2, 3]).is_broadcast_compatible([2])
    assert TensorShape([2, 3]).is_broadcast_compatible([1, 3])


def test_rank_checks():
    assert TensorShape([1, 2]).with_rank_at_least(2) == TensorShape([1, 2])
    assert TensorShape.unknown().with_rank_at_least(2).rank is None
    with pytest.raises(RankError):
        TensorShape([1]).with_rank_at_least(2)
    assert TensorShape.unknown().with_rank(2) == TensorShape([None, None])
    with pytest.raises(RankError):
        TensorShape([1]).with_rank(2)


def test_concatenate():
    assert TensorShape([1]).concatenate([2, None]) == TensorShape([1, 2, None])
    assert TensorShape([1]).concatenate(TensorShape.unknown()).rank is None
