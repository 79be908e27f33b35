#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
from typing_extensions import override
from typing import Any
import logging
import numpy as np

from symgraph.exceptions import DTypeError

__all__ = [
    "DType",
    "DTypeRegistry",
    "DTypes",
    "as_dtype",
]

logger = logging.getLogger(__name__)


class DType:
    """Element type of a tensor.

    A DType is identified by its canonical name and maps to the numpy dtype
    used to hold values of this type at evaluation time. Strings are held
    in numpy object arrays.
    """

    def __init__(self, name: str, np_dtype: Any, kind: str) -> None:
        assert kind in ("b", "i", "u", "f", "c", "S"), f"unknown dtype kind: {kind}"
        self._name = name
        self._np_dtype = np.dtype(np_dtype)
        self._kind = kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def as_numpy_dtype(self) -> np.dtype:
        return self._np_dtype

    @property
    def is_bool(self) -> bool:
        return self._kind == "b"

    @property
    def is_string(self) -> bool:
        return self._kind == "S"

    @property
    def is_integer(self) -> bool:
        return self._kind in ("i", "u")

    @property
    def is_unsigned(self) -> bool:
        return self._kind == "u"

    @property
    def is_floating(self) -> bool:
        return self._kind == "f"

    @property
    def is_complex(self) -> bool:
        return self._kind == "c"

    @property
    def is_numeric(self) -> bool:
        return self._kind in ("i", "u", "f", "c")

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DType):
            return NotImplemented
        return self._name == other._name

    @override
    def __hash__(self) -> int:
        return hash(self._name)

    @override
    def __str__(self) -> str:
        return self._name

    @override
    def __repr__(self) -> str:
        return f"DType({self._name})"


class DTypeRegistry:
    """Registry of the known dtypes and of their promotion rules.

    Numeric dtypes promote following numpy rules, bool only combines
    with bool and string only combines with string.
    """

    _python_types = {
        bool: "bool",
        int: "int64",
        float: "float64",
        complex: "complex128",
        str: "string",
        bytes: "string",
    }

    def __init__(self) -> None:
        self._dtypes: dict[str, DType] = {}
        self._np_names: dict[str, str] = {}

    def register(self, dtype: DType) -> DType:
        if dtype.name in self._dtypes:
            logger.warning(f"dtype {dtype.name} is already registered")
        self._dtypes[dtype.name] = dtype
        if not dtype.is_string:
            self._np_names[dtype.as_numpy_dtype.name] = dtype.name
        return dtype

    def get(self, name: str) -> DType:
        dtype = self._dtypes.get(name)
        if dtype is None:
            raise DTypeError(f"unknown dtype: {name}")
        return dtype

    def list_dtypes(self) -> list[DType]:
        return list(self._dtypes.values())

    def as_dtype(self, value: Any) -> DType:
        if isinstance(value, DType):
            return value
        if isinstance(value, str):
            if value in self._dtypes:
                return self._dtypes[value]
            if value in ("str", "object"):
                return self.get("string")
        if isinstance(value, type) and value in self._python_types:
            return self.get(self._python_types[value])
        try:
            np_dtype = np.dtype(value)
        except TypeError as e:
            raise DTypeError(f"can't convert to dtype: {value!r}") from e
        if np_dtype.kind in ("U", "S", "O"):
            return self.get("string")
        if np_dtype.name not in self._np_names:
            raise DTypeError(f"unsupported numpy dtype: {np_dtype}")
        return self.get(self._np_names[np_dtype.name])

    def promote(self, a: DType, b: DType) -> DType:
        if a == b:
            return a
        if not (a.is_numeric and b.is_numeric):
            raise DTypeError(f"incompatible dtypes: {a} and {b}")
        np_dtype = np.promote_types(a.as_numpy_dtype, b.as_numpy_dtype)
        return self.as_dtype(np_dtype)

    def real_dtype(self, dtype: DType) -> DType:
        if dtype.is_complex:
            return self.as_dtype(np.finfo(dtype.as_numpy_dtype).dtype)
        return dtype

    def is_boolean(self, dtype: DType) -> bool:
        return dtype.is_bool

    def is_numeric(self, dtype: DType) -> bool:
        return dtype.is_numeric

    def is_string(self, dtype: DType) -> bool:
        return dtype.is_string

    def is_integer(self, dtype: DType) -> bool:
        return dtype.is_integer

    def is_floating(self, dtype: DType) -> bool:
        return dtype.is_floating

    def is_complex(self, dtype: DType) -> bool:
        return dtype.is_complex


DTypes = DTypeRegistry()

bool_ = DTypes.register(DType("bool", np.bool_, "b"))
int8 = DTypes.register(DType("int8", np.int8, "i"))
int16 = DTypes.register(DType("int16", np.int16, "i"))
int32 = DTypes.register(DType("int32", np.int32, "i"))
int64 = DTypes.register(DType("int64", np.int64, "i"))
uint8 = DTypes.register(DType("uint8", np.uint8, "u"))
uint16 = DTypes.register(DType("uint16", np.uint16, "u"))
uint32 = DTypes.register(DType("uint32", np.uint32, "u"))
uint64 = DTypes.register(DType("uint64", np.uint64, "u"))
float16 = DTypes.register(DType("float16", np.float16, "f"))
float32 = DTypes.register(DType("float32", np.float32, "f"))
float64 = DTypes.register(DType("float64", np.float64, "f"))
complex64 = DTypes.register(DType("complex64", np.complex64, "c"))
complex128 = DTypes.register(DType("complex128", np.complex128, "c"))
string = DTypes.register(DType("string", np.object_, "S"))


def as_dtype(value: Any) -> DType:
    return DTypes.as_dtype(value)
