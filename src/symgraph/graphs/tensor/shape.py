#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from typing_extensions import override
from collections.abc import Iterator
from typing import Any, TypeAlias
import functools
import operator

from symgraph.exceptions import ShapeMismatchError, RankError

__all__ = [
    "TensorShape",
    "as_shape",
    "DimType",
    "ShapeLike",
]

DimType: TypeAlias = int | None
ShapeLike: TypeAlias = "TensorShape | tuple[DimType, ...] | list[DimType] | None"


def _as_dim(dim: Any) -> DimType:
    if dim is None:
        return None
    if isinstance(dim, bool) or not isinstance(dim, int):
        try:
            dim = operator.index(dim)
        except TypeError as e:
            raise ShapeMismatchError(f"invalid dimension: {dim!r}") from e
    if dim < 0:
        raise ShapeMismatchError(f"negative dimension: {dim}")
    return dim


class TensorShape:
    """Static shape of a tensor.

    A TensorShape is either of unknown rank (``dims is None``) or an ordered
    tuple of dimensions, each a non-negative int or None when unknown.
    Instances are immutable, refinement produces new shapes.
    """

    def __init__(self, dims: Any = None) -> None:
        if dims is None:
            self._dims: tuple[DimType, ...] | None = None
        elif isinstance(dims, TensorShape):
            self._dims = dims._dims
        else:
            self._dims = tuple(_as_dim(d) for d in dims)

    @classmethod
    def unknown(cls) -> TensorShape:
        return cls(None)

    @classmethod
    def unknown_of_rank(cls, rank: int) -> TensorShape:
        return cls([None] * rank)

    @classmethod
    def scalar(cls) -> TensorShape:
        return cls(())

    @property
    def dims(self) -> tuple[DimType, ...] | None:
        return self._dims

    @property
    def rank(self) -> int | None:
        return None if self._dims is None else len(self._dims)

    @property
    def ndims(self) -> int | None:
        return self.rank

    def is_fully_defined(self) -> bool:
        return self._dims is not None and all(d is not None for d in self._dims)

    def as_list(self) -> list[DimType]:
        if self._dims is None:
            raise ValueError("as_list() is not defined on an unknown rank shape")
        return list(self._dims)

    def num_elements(self) -> int | None:
        if not self.is_fully_defined():
            return None
        assert self._dims is not None
        return functools.reduce(operator.mul, self._dims, 1)

    def with_rank_at_least(self, rank: int) -> TensorShape:
        if self.rank is not None and self.rank < rank:
            raise RankError(f"shape {self} must have rank at least {rank}")
        return self

    def with_rank(self, rank: int) -> TensorShape:
        if self.rank is None:
            return self.unknown_of_rank(rank)
        if self.rank != rank:
            raise RankError(f"shape {self} must have rank {rank}")
        return self

    def concatenate(self, other: ShapeLike) -> TensorShape:
        other = as_shape(other)
        if self._dims is None or other._dims is None:
            return TensorShape.unknown()
        return TensorShape(self._dims + other._dims)

    def is_compatible_with(self, other: ShapeLike) -> bool:
        other = as_shape(other)
        if self._dims is None or other._dims is None:
            return True
        if len(self._dims) != len(other._dims):
            return False
        return all(a is None or b is None or a == b for a, b in zip(self._dims, other._dims))

    def merge_with(self, other: ShapeLike) -> TensorShape:
        """Returns the most specific shape compatible with self and other.

        Raises ShapeMismatchError when the ranks differ or when a known
        dimension conflicts with another known dimension.
        """
        other = as_shape(other)
        if self._dims is None:
            return other
        if other._dims is None:
            return self
        if len(self._dims) != len(other._dims):
            raise ShapeMismatchError(f"shapes {self} and {other} have different ranks")
        merged = []
        for idx, (a, b) in enumerate(zip(self._dims, other._dims)):
            if a is not None and b is not None and a != b:
                raise ShapeMismatchError(
                    f"shapes {self} and {other} conflict at dimension {idx}: {a} != {b}"
                )
            merged.append(a if a is not None else b)
        return TensorShape(merged)

    def broadcast_with(self, other: ShapeLike) -> TensorShape:
        """Returns the broadcast shape of self and other.

        Dimensions are aligned from the last axis. Two dimensions are
        compatible if equal, if one is unknown, or if one is 1. A missing
        leading dimension behaves as 1.
        """
        other = as_shape(other)
        if self._dims is None or other._dims is None:
            return TensorShape.unknown()
        rank = max(len(self._dims), len(other._dims))
        lhs = (1,) * (rank - len(self._dims)) + self._dims
        rhs = (1,) * (rank - len(other._dims)) + other._dims
        dims: list[DimType] = []
        for idx, (a, b) in enumerate(zip(lhs, rhs)):
            if a == 1:
                dims.append(b)
            elif b == 1:
                dims.append(a)
            elif a is None:
                dims.append(b)
            elif b is None or a == b:
                dims.append(a)
            else:
                raise ShapeMismatchError(
                    f"shapes {self} and {other} are not broadcastable at axis {idx - rank}: {a} vs {b}"
                )
        return TensorShape(dims)

    def is_broadcast_compatible(self, other: ShapeLike) -> bool:
        try:
            self.broadcast_with(other)
        except ShapeMismatchError:
            return False
        return True

    def __len__(self) -> int:
        if self._dims is None:
            raise ValueError("len() is not defined on an unknown rank shape")
        return len(self._dims)

    def __iter__(self) -> Iterator[DimType]:
        if self._dims is None:
            raise ValueError("can't iterate over an unknown rank shape")
        return iter(self._dims)

    def __getitem__(self, key: Any) -> Any:
        if self._dims is None:
            if isinstance(key, slice):
                return TensorShape.unknown()
            return None
        if isinstance(key, slice):
            return TensorShape(self._dims[key])
        return self._dims[key]

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, (tuple, list)):
            return self._dims == tuple(other)
        if not isinstance(other, TensorShape):
            return NotImplemented
        return self._dims == other._dims

    @override
    def __hash__(self) -> int:
        return hash(self._dims)

    @override
    def __str__(self) -> str:
        if self._dims is None:
            return "<unknown>"
        return "[" + ", ".join("?" if d is None else str(d) for d in self._dims) + "]"

    @override
    def __repr__(self) -> str:
        if self._dims is None:
            return "TensorShape(None)"
        return f"TensorShape({list(self._dims)})"


def as_shape(shape: Any) -> TensorShape:
    if isinstance(shape, TensorShape):
        return shape
    if isinstance(shape, int):
        return TensorShape([shape])
    return TensorShape(shape)
