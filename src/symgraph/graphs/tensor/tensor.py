#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from __future__ import annotations

from typing_extensions import override
from collections.abc import Mapping
from typing import Any, NoReturn, TYPE_CHECKING

from symgraph.itf.data import Tensor
from symgraph.itf.exec import Session
from symgraph.exceptions import (
    InvalidIndexError,
    DTypeMismatchError,
    EvaluationError,
)

from .data import SymTensorType
from .dtype import DType, as_dtype
from .shape import TensorShape, as_shape

if TYPE_CHECKING:
    from .graph import TensorGraph
    from .operation import TensorOperation

__all__ = [
    "SymTensor",
]


class SymTensor(Tensor):
    """Handle on one output of a TensorOperation.

    A tensor is created once per output slot, by its operation. Two
    handles compare equal only when they designate the same slot of the
    same operation: ``==`` is handle identity and returns a bool, the
    element-wise comparison is ``equal()``.

    Arithmetic, logical and comparison methods build new operations in the
    tensor's graph. Each binary method has a reflected form, called on the
    right operand with the left operand as argument: ``y.rsub(x)`` builds
    ``sub(x, y)``. Python operators map onto these methods.
    """

    # numpy defers to the reflected operators instead of looping over arrays
    __array_ufunc__ = None

    def __init__(self, op: TensorOperation, value_index: int, dtype: Any) -> None:
        if not isinstance(value_index, int) or not 0 <= value_index < op.num_outputs:
            raise InvalidIndexError(
                f"invalid output index {value_index} for operation {op.name} with {op.num_outputs} outputs"
            )
        dtype = as_dtype(dtype)
        expected = op.output_type(value_index).dtype
        if dtype != expected:
            raise DTypeMismatchError(
                f"dtype {dtype} mismatch for output {value_index} of operation {op.name}: expected {expected}"
            )
        self._op = op
        self._value_index = value_index
        op._bind_output(value_index, self)

    @property
    @override
    def op(self) -> TensorOperation:
        return self._op

    @property
    @override
    def value_index(self) -> int:
        return self._value_index

    @property
    @override
    def graph(self) -> TensorGraph:
        return self._op.graph

    @property
    @override
    def name(self) -> str:
        return f"{self._op.name}:{self._value_index}"

    @property
    @override
    def type(self) -> SymTensorType:
        return self._op.output_type(self._value_index)

    @property
    def dtype(self) -> DType:
        return self.type.dtype

    @property
    def shape(self) -> TensorShape:
        return self.type.shape

    @property
    def ndims(self) -> int | None:
        return self.shape.rank

    @property
    def device(self) -> str | None:
        return None

    def get_shape(self) -> TensorShape:
        return self.shape

    @override
    def set_shape(self, shape: Any) -> None:
        self._op._refine_output_shape(self._value_index, as_shape(shape))

    @override
    def consumers(self) -> list[TensorOperation]:
        return self.graph.consumers_of(self)

    @override
    def eval(
        self,
        feed_dict: Mapping[Tensor, Any] | None = None,
        session: Session | None = None,
    ) -> Any:
        if session is None:
            session = Session.get_default()
        if session is None:
            raise EvaluationError(
                f"no session given and no default session to evaluate {self.name}"
            )
        return session.run([self], feed_dict)[0]

    def eq(self, other: object) -> bool:
        if not isinstance(other, SymTensor):
            return False
        return (
            self._op is other._op
            and self._value_index == other._value_index
            and self.graph is other.graph
        )

    # Element-wise operators, see ops for the semantics

    def add(self, y: Any, name: str | None = None) -> SymTensor:
        return F.add(self, y, name=name)

    def sub(self, y: Any, name: str | None = None) -> SymTensor:
        return F.sub(self, y, name=name)

    def mul(self, y: Any, name: str | None = None) -> SymTensor:
        return F.mul(self, y, name=name)

    def div(self, y: Any, name: str | None = None) -> SymTensor:
        return F.div(self, y, name=name)

    def truediv(self, y: Any, name: str | None = None) -> SymTensor:
        return F.truediv(self, y, name=name)

    def floordiv(self, y: Any, name: str | None = None) -> SymTensor:
        return F.floordiv(self, y, name=name)

    def mod(self, y: Any, name: str | None = None) -> SymTensor:
        return F.mod(self, y, name=name)

    def pow(self, y: Any, name: str | None = None) -> SymTensor:
        return F.pow(self, y, name=name)

    def and_(self, y: Any, name: str | None = None) -> SymTensor:
        return F.and_(self, y, name=name)

    def or_(self, y: Any, name: str | None = None) -> SymTensor:
        return F.or_(self, y, name=name)

    def xor(self, y: Any, name: str | None = None) -> SymTensor:
        return F.xor(self, y, name=name)

    def equal(self, y: Any, name: str | None = None) -> SymTensor:
        return F.equal(self, y, name=name)

    def not_equal(self, y: Any, name: str | None = None) -> SymTensor:
        return F.not_equal(self, y, name=name)

    def ge(self, y: Any, name: str | None = None) -> SymTensor:
        return F.ge(self, y, name=name)

    def gt(self, y: Any, name: str | None = None) -> SymTensor:
        return F.gt(self, y, name=name)

    def le(self, y: Any, name: str | None = None) -> SymTensor:
        return F.le(self, y, name=name)

    def lt(self, y: Any, name: str | None = None) -> SymTensor:
        return F.lt(self, y, name=name)

    def abs(self, name: str | None = None) -> SymTensor:
        return F.abs(self, name=name)

    def neg(self, name: str | None = None) -> SymTensor:
        return F.neg(self, name=name)

    def invert(self, name: str | None = None) -> SymTensor:
        return F.invert(self, name=name)

    def matmul(
        self,
        y: Any,
        transpose_a: bool = False,
        transpose_b: bool = False,
        adjoint_a: bool = False,
        adjoint_b: bool = False,
        a_is_sparse: bool = False,
        b_is_sparse: bool = False,
        name: str | None = None,
    ) -> SymTensor:
        return F.matmul(
            self,
            y,
            transpose_a=transpose_a,
            transpose_b=transpose_b,
            adjoint_a=adjoint_a,
            adjoint_b=adjoint_b,
            a_is_sparse=a_is_sparse,
            b_is_sparse=b_is_sparse,
            name=name,
        )

    # Reflected operators: self is the right operand, x the left one

    def radd(self, x: Any, name: str | None = None) -> SymTensor:
        return F.add(x, self, name=name)

    def rsub(self, x: Any, name: str | None = None) -> SymTensor:
        return F.sub(x, self, name=name)

    def rmul(self, x: Any, name: str | None = None) -> SymTensor:
        return F.mul(x, self, name=name)

    def rdiv(self, x: Any, name: str | None = None) -> SymTensor:
        return F.div(x, self, name=name)

    def rtruediv(self, x: Any, name: str | None = None) -> SymTensor:
        return F.truediv(x, self, name=name)

    def rfloordiv(self, x: Any, name: str | None = None) -> SymTensor:
        return F.floordiv(x, self, name=name)

    def rmod(self, x: Any, name: str | None = None) -> SymTensor:
        return F.mod(x, self, name=name)

    def rpow(self, x: Any, name: str | None = None) -> SymTensor:
        return F.pow(x, self, name=name)

    def rand_(self, x: Any, name: str | None = None) -> SymTensor:
        return F.and_(x, self, name=name)

    def ror_(self, x: Any, name: str | None = None) -> SymTensor:
        return F.or_(x, self, name=name)

    def rxor(self, x: Any, name: str | None = None) -> SymTensor:
        return F.xor(x, self, name=name)

    def rmatmul(
        self,
        x: Any,
        transpose_a: bool = False,
        transpose_b: bool = False,
        adjoint_a: bool = False,
        adjoint_b: bool = False,
        a_is_sparse: bool = False,
        b_is_sparse: bool = False,
        name: str | None = None,
    ) -> SymTensor:
        return F.matmul(
            x,
            self,
            transpose_a=transpose_a,
            transpose_b=transpose_b,
            adjoint_a=adjoint_a,
            adjoint_b=adjoint_b,
            a_is_sparse=a_is_sparse,
            b_is_sparse=b_is_sparse,
            name=name,
        )

    # Python operators

    def __add__(self, other: Any) -> SymTensor:
        return self.add(other)

    def __radd__(self, other: Any) -> SymTensor:
        return self.radd(other)

    def __sub__(self, other: Any) -> SymTensor:
        return self.sub(other)

    def __rsub__(self, other: Any) -> SymTensor:
        return self.rsub(other)

    def __mul__(self, other: Any) -> SymTensor:
        return self.mul(other)

    def __rmul__(self, other: Any) -> SymTensor:
        return self.rmul(other)

    def __truediv__(self, other: Any) -> SymTensor:
        return self.truediv(other)

    def __rtruediv__(self, other: Any) -> SymTensor:
        return self.rtruediv(other)

    def __floordiv__(self, other: Any) -> SymTensor:
        return self.floordiv(other)

    def __rfloordiv__(self, other: Any) -> SymTensor:
        return self.rfloordiv(other)

    def __mod__(self, other: Any) -> SymTensor:
        return self.mod(other)

    def __rmod__(self, other: Any) -> SymTensor:
        return self.rmod(other)

    def __pow__(self, other: Any) -> SymTensor:
        return self.pow(other)

    def __rpow__(self, other: Any) -> SymTensor:
        return self.rpow(other)

    def __matmul__(self, other: Any) -> SymTensor:
        return self.matmul(other)

    def __rmatmul__(self, other: Any) -> SymTensor:
        return self.rmatmul(other)

    def __and__(self, other: Any) -> SymTensor:
        return self.and_(other)

    def __rand__(self, other: Any) -> SymTensor:
        return self.rand_(other)

    def __or__(self, other: Any) -> SymTensor:
        return self.or_(other)

    def __ror__(self, other: Any) -> SymTensor:
        return self.ror_(other)

    def __xor__(self, other: Any) -> SymTensor:
        return self.xor(other)

    def __rxor__(self, other: Any) -> SymTensor:
        return self.rxor(other)

    def __invert__(self) -> SymTensor:
        return self.invert()

    def __neg__(self) -> SymTensor:
        return self.neg()

    def __abs__(self) -> SymTensor:
        return self.abs()

    def __ge__(self, other: Any) -> SymTensor:
        return self.ge(other)

    def __gt__(self, other: Any) -> SymTensor:
        return self.gt(other)

    def __le__(self, other: Any) -> SymTensor:
        return self.le(other)

    def __lt__(self, other: Any) -> SymTensor:
        return self.lt(other)

    @override
    def __eq__(self, other: object) -> bool:
        return self.eq(other)

    @override
    def __hash__(self) -> int:
        return hash((id(self._op), self._value_index))

    def __bool__(self) -> NoReturn:
        raise TypeError(
            f"symbolic tensor {self.name} has no truth value, use logical operators to combine conditions"
        )

    def __iter__(self) -> NoReturn:
        raise TypeError(f"symbolic tensor {self.name} is not iterable")

    @override
    def __str__(self) -> str:
        return f"{self.name}: {self.type}"

    @override
    def __repr__(self) -> str:
        return f"<SymTensor {self.name!r} shape={self.shape} dtype={self.dtype}>"


# ops builds on SymTensor
from . import ops as F  # noqa: E402
