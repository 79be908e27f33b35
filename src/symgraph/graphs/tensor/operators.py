#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
from typing import TypeAlias, Any, cast
from types import SimpleNamespace as NS
import numpy as np
import numpy.typing

from symgraph.itf.operator import Operator
from symgraph.itf.data import TensorType
from symgraph.exceptions import (
    DTypeError,
    ShapeMismatchError,
    InvalidArgumentError,
    EvaluationError,
)
from symgraph.utils.config import get_dtype_promotion

from .data import SymTensorType
from .dtype import DType, DTypes
from .shape import TensorShape

__all__ = [
    "SymOperator",
    "SymOperPlaceholder",
    "SymOperConstant",
    "SymOperBinary",
    "SymOperUnary",
    "SymOperMatmul",
    "SymOperSparseDenseMatmul",
]


SymOperatorAttr: TypeAlias = Any
SymOperatorAttrs: TypeAlias = NS
NDArray: TypeAlias = numpy.typing.NDArray[Any]

# dtype kinds accepted by operators
NUMERIC_KINDS = "iufc"
REAL_KINDS = "iuf"
BOOL_KINDS = "b"
ANY_KINDS = "biufcS"

MATMUL_DTYPES = ("float16", "float32", "float64", "int32", "complex64", "complex128")


def _types(inputs_types: Sequence[TensorType]) -> list[SymTensorType]:
    return cast(list[SymTensorType], list(inputs_types))


class SymOperator(Operator):
    def __init__(self, name: str, **attrs: SymOperatorAttr) -> None:
        self._name = name
        self._attrs = NS(**attrs)

    @property
    @override
    def name(self) -> str:
        return self._name

    @property
    def attrs(self) -> SymOperatorAttrs:
        return self._attrs

    @property
    def num_inputs(self) -> int | None:
        return None

    def check_dtype(self, dtype: DType) -> None:
        pass

    @override
    def forward_types(self, inputs_types: Sequence[TensorType]) -> list[TensorType]:
        return list(inputs_types)

    @override
    def forward(self, inputs: Sequence[NDArray]) -> list[NDArray]:
        return list(inputs)


class SymOperPlaceholder(SymOperator):
    def __init__(self, type: SymTensorType) -> None:
        super().__init__("placeholder", dtype=type.dtype.name, shape=type.shape)
        self._type = type

    @property
    def type(self) -> SymTensorType:
        return self._type

    @override
    def forward_types(self, inputs_types: Sequence[TensorType]) -> list[TensorType]:
        assert len(inputs_types) == 0
        return [self._type]

    @override
    def forward(self, inputs: Sequence[NDArray]) -> list[NDArray]:
        raise EvaluationError("placeholder value must be fed")


class SymOperConstant(SymOperator):
    def __init__(self, value: NDArray, dtype: DType) -> None:
        super().__init__("constant", dtype=dtype.name)
        self._value = value
        self._type = SymTensorType(shape=value.shape, dtype=dtype)

    @property
    def value(self) -> NDArray:
        return self._value

    @override
    def forward_types(self, inputs_types: Sequence[TensorType]) -> list[TensorType]:
        assert len(inputs_types) == 0
        return [self._type]

    @override
    def forward(self, inputs: Sequence[NDArray]) -> list[NDArray]:
        return [self._value]


class SymOperBinary(SymOperator):
    """Element-wise operator over two broadcast operands.

    Operands dtypes must be of one of the accepted kinds and promote to a
    common dtype, the output shape is the broadcast of the operands shapes.
    """

    kinds = NUMERIC_KINDS

    @property
    @override
    def num_inputs(self) -> int:
        return 2

    @override
    def check_dtype(self, dtype: DType) -> None:
        if dtype.kind not in self.kinds:
            raise DTypeError(f"operator {self.name} does not support dtype {dtype}")

    def promote(self, x: DType, y: DType) -> DType:
        if get_dtype_promotion() == "strict" and x != y:
            raise DTypeError(
                f"operator {self.name} operands dtypes mismatch: {x} != {y}"
            )
        try:
            return DTypes.promote(x, y)
        except DTypeError as e:
            raise DTypeError(f"operator {self.name}: {e}") from e

    def result_dtype(self, dtype: DType) -> DType:
        return dtype

    def kernel(self, x: NDArray, y: NDArray) -> Any:
        raise NotImplementedError(f"no kernel for operator {self.name}")

    @override
    def forward_types(self, inputs_types: Sequence[TensorType]) -> list[TensorType]:
        assert len(inputs_types) == 2, (
            f"len of inputs types mismatch : {len(inputs_types)} == 2"
        )
        x, y = _types(inputs_types)
        self.check_dtype(x.dtype)
        self.check_dtype(y.dtype)
        dtype = self.promote(x.dtype, y.dtype)
        shape = x.shape.broadcast_with(y.shape)
        return [SymTensorType(shape=shape, dtype=self.result_dtype(dtype))]

    @override
    def forward(self, inputs: Sequence[NDArray]) -> list[NDArray]:
        x, y = inputs
        out = np.asarray(self.kernel(x, y))
        return [out]


class SymOperAdd(SymOperBinary):
    kinds = NUMERIC_KINDS + "S"

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("add", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.add(x, y)


class SymOperSub(SymOperBinary):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("sub", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.subtract(x, y)


class SymOperMul(SymOperBinary):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("mul", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.multiply(x, y)


class SymOperDiv(SymOperBinary):
    # Keeps the operands dtype: integer division floors
    kinds = REAL_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("div", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        if np.issubdtype(np.result_type(x, y), np.integer):
            return np.floor_divide(x, y)
        return np.true_divide(x, y)


class SymOperTrueDiv(SymOperBinary):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("truediv", **attrs)

    @override
    def result_dtype(self, dtype: DType) -> DType:
        if dtype.is_integer:
            itemsize = dtype.as_numpy_dtype.itemsize
            return DTypes.get("float32" if itemsize <= 2 else "float64")
        return dtype

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.true_divide(x, y)


class SymOperFloorDiv(SymOperBinary):
    kinds = REAL_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("floordiv", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.floor_divide(x, y)


class SymOperMod(SymOperBinary):
    kinds = REAL_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("mod", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.mod(x, y)


class SymOperPow(SymOperBinary):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("pow", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.power(x, y)


class SymOperLogicalAnd(SymOperBinary):
    kinds = BOOL_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("logical_and", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.logical_and(x, y)


class SymOperLogicalOr(SymOperBinary):
    kinds = BOOL_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("logical_or", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.logical_or(x, y)


class SymOperLogicalXor(SymOperBinary):
    kinds = BOOL_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("logical_xor", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.logical_xor(x, y)


class SymOperCompare(SymOperBinary):
    kinds = REAL_KINDS

    @override
    def result_dtype(self, dtype: DType) -> DType:
        return DTypes.get("bool")


class SymOperEqual(SymOperCompare):
    kinds = ANY_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("equal", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.equal(x, y)


class SymOperNotEqual(SymOperCompare):
    kinds = ANY_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("not_equal", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.not_equal(x, y)


class SymOperGreater(SymOperCompare):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("greater", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.greater(x, y)


class SymOperGreaterEqual(SymOperCompare):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("greater_equal", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.greater_equal(x, y)


class SymOperLess(SymOperCompare):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("less", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.less(x, y)


class SymOperLessEqual(SymOperCompare):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("less_equal", **attrs)

    @override
    def kernel(self, x: NDArray, y: NDArray) -> Any:
        return np.less_equal(x, y)


class SymOperUnary(SymOperator):
    kinds = NUMERIC_KINDS

    @property
    @override
    def num_inputs(self) -> int:
        return 1

    @override
    def check_dtype(self, dtype: DType) -> None:
        if dtype.kind not in self.kinds:
            raise DTypeError(f"operator {self.name} does not support dtype {dtype}")

    def result_dtype(self, dtype: DType) -> DType:
        return dtype

    def kernel(self, x: NDArray) -> Any:
        raise NotImplementedError(f"no kernel for operator {self.name}")

    @override
    def forward_types(self, inputs_types: Sequence[TensorType]) -> list[TensorType]:
        assert len(inputs_types) == 1, (
            f"len of inputs types mismatch : {len(inputs_types)} == 1"
        )
        (x,) = _types(inputs_types)
        self.check_dtype(x.dtype)
        return [SymTensorType(shape=x.shape, dtype=self.result_dtype(x.dtype))]

    @override
    def forward(self, inputs: Sequence[NDArray]) -> list[NDArray]:
        return [np.asarray(self.kernel(inputs[0]))]


class SymOperAbs(SymOperUnary):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("abs", **attrs)

    @override
    def result_dtype(self, dtype: DType) -> DType:
        return DTypes.real_dtype(dtype)

    @override
    def kernel(self, x: NDArray) -> Any:
        return np.abs(x)


class SymOperNeg(SymOperUnary):
    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("neg", **attrs)

    @override
    def kernel(self, x: NDArray) -> Any:
        return np.negative(x)


class SymOperLogicalNot(SymOperUnary):
    kinds = BOOL_KINDS

    def __init__(self, **attrs: SymOperatorAttr) -> None:
        super().__init__("logical_not", **attrs)

    @override
    def kernel(self, x: NDArray) -> Any:
        return np.logical_not(x)


def _matmul_operand(x: NDArray, transpose: bool, adjoint: bool) -> NDArray:
    if transpose or adjoint:
        x = np.swapaxes(x, -1, -2)
    if adjoint:
        x = np.conj(x)
    return x


class SymOperMatmul(SymOperator):
    def __init__(
        self,
        transpose_a: bool = False,
        transpose_b: bool = False,
        adjoint_a: bool = False,
        adjoint_b: bool = False,
        a_is_sparse: bool = False,
        b_is_sparse: bool = False,
    ) -> None:
        if transpose_a and adjoint_a:
            raise InvalidArgumentError("only one of transpose_a and adjoint_a can be set")
        if transpose_b and adjoint_b:
            raise InvalidArgumentError("only one of transpose_b and adjoint_b can be set")
        name = "sparse_matmul" if a_is_sparse or b_is_sparse else "matmul"
        super().__init__(
            name,
            transpose_a=transpose_a,
            transpose_b=transpose_b,
            adjoint_a=adjoint_a,
            adjoint_b=adjoint_b,
            a_is_sparse=a_is_sparse,
            b_is_sparse=b_is_sparse,
        )
        self._swap_a = transpose_a or adjoint_a
        self._swap_b = transpose_b or adjoint_b

    @property
    @override
    def num_inputs(self) -> int:
        return 2

    @override
    def check_dtype(self, dtype: DType) -> None:
        if dtype.name not in MATMUL_DTYPES:
            raise DTypeError(f"operator {self.name} does not support dtype {dtype}")

    def result_shape(self, a: TensorShape, b: TensorShape) -> TensorShape:
        a = a.with_rank_at_least(2)
        b = b.with_rank_at_least(2)
        if a.rank is None or b.rank is None:
            return TensorShape.unknown()
        a_rows, a_inner = a[-2], a[-1]
        if self._swap_a:
            a_rows, a_inner = a_inner, a_rows
        b_inner, b_cols = b[-2], b[-1]
        if self._swap_b:
            b_inner, b_cols = b_cols, b_inner
        if a_inner is not None and b_inner is not None and a_inner != b_inner:
            raise ShapeMismatchError(
                f"operator {self.name} inner dimensions mismatch: {a} and {b}: {a_inner} != {b_inner}"
            )
        batch = a[:-2].broadcast_with(b[:-2])
        return batch.concatenate([a_rows, b_cols])

    @override
    def forward_types(self, inputs_types: Sequence[TensorType]) -> list[TensorType]:
        assert len(inputs_types) == 2
        x, y = _types(inputs_types)
        if x.dtype != y.dtype:
            raise DTypeError(
                f"operator {self.name} operands dtypes mismatch: {x.dtype} != {y.dtype}"
            )
        self.check_dtype(x.dtype)
        shape = self.result_shape(x.shape, y.shape)
        return [SymTensorType(shape=shape, dtype=x.dtype)]

    @override
    def forward(self, inputs: Sequence[NDArray]) -> list[NDArray]:
        a = _matmul_operand(inputs[0], self._swap_a, self.attrs.adjoint_a)
        b = _matmul_operand(inputs[1], self._swap_b, self.attrs.adjoint_b)
        return [np.matmul(a, b)]


class SymOperSparseDenseMatmul(SymOperMatmul):
    """Product of a rank 2 sparse matrix by a dense matrix.

    Inputs are the sparse operand components (indices, values, dense
    shape) followed by the dense operand. The static shape of the sparse
    operand is given at construction.
    """

    def __init__(
        self, a_shape: TensorShape, adjoint_a: bool = False, adjoint_b: bool = False
    ) -> None:
        super().__init__(adjoint_a=adjoint_a, adjoint_b=adjoint_b)
        self._name = "sparse_dense_matmul"
        self._a_shape = a_shape.with_rank(2)
        self._attrs = NS(adjoint_a=adjoint_a, adjoint_b=adjoint_b)

    @property
    @override
    def num_inputs(self) -> int:
        return 4

    @override
    def forward_types(self, inputs_types: Sequence[TensorType]) -> list[TensorType]:
        assert len(inputs_types) == 4
        _, values, _, b = _types(inputs_types)
        a = SymTensorType(shape=self._a_shape, dtype=values.dtype)
        b = SymTensorType(shape=b.shape.with_rank(2), dtype=b.dtype)
        return super().forward_types([a, b])

    @override
    def forward(self, inputs: Sequence[NDArray]) -> list[NDArray]:
        indices, values, dense_shape, b = inputs
        a = np.zeros(tuple(int(d) for d in dense_shape), dtype=values.dtype)
        for idx, value in zip(indices, values):
            a[tuple(int(i) for i in idx)] += value
        return super().forward([a, b])
