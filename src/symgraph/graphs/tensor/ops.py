#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
"""Operator algebra over symbolic tensors.

Every function registers a new operation in the graph of its tensor
operands and returns the operation output, nothing is computed. Binary
functions take the operands in their canonical ``(x, y)`` order, the
operation inputs being ``[x, y]``. A non tensor operand (Python scalar,
list, numpy array) is converted to a constant of the other operand's
graph, using the other operand's dtype when the value can be cast to it.
"""
from typing import Any

from symgraph.exceptions import DTypeError, InvalidArgumentError

from .context import get_default_graph
from .operation import TensorOperation
from .operators import (
    SymOperator,
    SymOperAdd,
    SymOperSub,
    SymOperMul,
    SymOperDiv,
    SymOperTrueDiv,
    SymOperFloorDiv,
    SymOperMod,
    SymOperPow,
    SymOperLogicalAnd,
    SymOperLogicalOr,
    SymOperLogicalXor,
    SymOperEqual,
    SymOperNotEqual,
    SymOperGreater,
    SymOperGreaterEqual,
    SymOperLess,
    SymOperLessEqual,
    SymOperAbs,
    SymOperNeg,
    SymOperLogicalNot,
    SymOperMatmul,
    SymOperSparseDenseMatmul,
)
from .sources import placeholder, constant, convert_to_tensor
from .sparse import SparseTensor
from .tensor import SymTensor

__all__ = [
    "placeholder",
    "constant",
    "convert_to_tensor",
    "add",
    "sub",
    "mul",
    "div",
    "truediv",
    "floordiv",
    "mod",
    "pow",
    "and_",
    "or_",
    "xor",
    "equal",
    "not_equal",
    "ge",
    "gt",
    "le",
    "lt",
    "abs",
    "neg",
    "invert",
    "matmul",
]


def _apply(operator: SymOperator, inputs: list[SymTensor], name: str | None) -> SymTensor:
    graph = inputs[0].graph
    op = TensorOperation(graph, operator, inputs, name=name)
    return op.outputs[0]


def _check_dense(value: Any, operator: SymOperator) -> None:
    if isinstance(value, SparseTensor):
        raise DTypeError(f"operator {operator.name} does not accept sparse tensors")


def _binary(operator: SymOperator, x: Any, y: Any, name: str | None) -> SymTensor:
    _check_dense(x, operator)
    _check_dense(y, operator)
    if isinstance(x, SymTensor):
        y = convert_to_tensor(y, graph=x.graph, dtype_hint=x.dtype)
    elif isinstance(y, SymTensor):
        x = convert_to_tensor(x, graph=y.graph, dtype_hint=y.dtype)
    else:
        x = convert_to_tensor(x, graph=get_default_graph())
        y = convert_to_tensor(y, graph=x.graph, dtype_hint=x.dtype)
    return _apply(operator, [x, y], name)


def _unary(operator: SymOperator, x: Any, name: str | None) -> SymTensor:
    _check_dense(x, operator)
    if not isinstance(x, SymTensor):
        x = convert_to_tensor(x, graph=get_default_graph())
    return _apply(operator, [x], name)


def add(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns x + y element-wise, also defined on strings (concatenation)."""
    return _binary(SymOperAdd(), x, y, name)


def sub(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns x - y element-wise."""
    return _binary(SymOperSub(), x, y, name)


def mul(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns x * y element-wise."""
    return _binary(SymOperMul(), x, y, name)


def div(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns x / y element-wise in the operands dtype.

    Integer operands give the floored quotient, use truediv to get a
    floating point result.
    """
    return _binary(SymOperDiv(), x, y, name)


def truediv(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns x / y element-wise, integer operands are divided as floating point.

    8 and 16 bits integers give float32, wider integers give float64.
    """
    return _binary(SymOperTrueDiv(), x, y, name)


def floordiv(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns x // y element-wise, rounded toward negative infinity."""
    return _binary(SymOperFloorDiv(), x, y, name)


def mod(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the remainder of floordiv(x, y) element-wise."""
    return _binary(SymOperMod(), x, y, name)


def pow(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns x ** y element-wise."""
    return _binary(SymOperPow(), x, y, name)


def and_(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x AND y element-wise, on bool tensors."""
    return _binary(SymOperLogicalAnd(), x, y, name)


def or_(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x OR y element-wise, on bool tensors."""
    return _binary(SymOperLogicalOr(), x, y, name)


def xor(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x XOR y element-wise, on bool tensors."""
    return _binary(SymOperLogicalXor(), x, y, name)


def equal(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x == y element-wise."""
    return _binary(SymOperEqual(), x, y, name)


def not_equal(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x != y element-wise."""
    return _binary(SymOperNotEqual(), x, y, name)


def ge(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x >= y element-wise."""
    return _binary(SymOperGreaterEqual(), x, y, name)


def gt(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x > y element-wise."""
    return _binary(SymOperGreater(), x, y, name)


def le(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x <= y element-wise."""
    return _binary(SymOperLessEqual(), x, y, name)


def lt(x: Any, y: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of x < y element-wise."""
    return _binary(SymOperLess(), x, y, name)


def abs(x: Any, name: str | None = None) -> Any:
    """Returns the absolute value of x element-wise.

    Complex values give their magnitude as float32 or float64. A
    SparseTensor gives a SparseTensor with the same indices.
    """
    if isinstance(x, SparseTensor):
        values = _apply(SymOperAbs(), [x.values], name)
        return x.with_values(values)
    return _unary(SymOperAbs(), x, name)


def neg(x: Any, name: str | None = None) -> SymTensor:
    """Returns -x element-wise."""
    return _unary(SymOperNeg(), x, name)


def invert(x: Any, name: str | None = None) -> SymTensor:
    """Returns the truth value of NOT x element-wise, on bool tensors."""
    return _unary(SymOperLogicalNot(), x, name)


def matmul(
    x: Any,
    y: Any,
    transpose_a: bool = False,
    transpose_b: bool = False,
    adjoint_a: bool = False,
    adjoint_b: bool = False,
    a_is_sparse: bool = False,
    b_is_sparse: bool = False,
    name: str | None = None,
) -> SymTensor:
    """Returns the matrix product of x and y.

    Operands have rank 2 or more, leading dimensions are batch dimensions
    and broadcast. Each operand may be transposed or adjointed (conjugate
    transpose) before the product, not both. The sparse hints only select
    the operation type. A SparseTensor x of rank 2 gives a
    sparse_dense_matmul operation.
    """
    if isinstance(x, SparseTensor):
        if transpose_a or transpose_b:
            raise InvalidArgumentError(
                "matmul of a sparse operand supports adjoint_a and adjoint_b only"
            )
        operator: SymOperator = SymOperSparseDenseMatmul(
            x.shape, adjoint_a=adjoint_a, adjoint_b=adjoint_b
        )
        _check_dense(y, operator)
        y = convert_to_tensor(y, graph=x.graph, dtype_hint=x.dtype)
        return _apply(operator, [x.indices, x.values, x.dense_shape, y], name)
    operator = SymOperMatmul(
        transpose_a=transpose_a,
        transpose_b=transpose_b,
        adjoint_a=adjoint_a,
        adjoint_b=adjoint_b,
        a_is_sparse=a_is_sparse,
        b_is_sparse=b_is_sparse,
    )
    return _binary(operator, x, y, name)
