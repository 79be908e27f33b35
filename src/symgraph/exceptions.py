#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The Symgraph Project Authors
#
"""Graph construction and evaluation exceptions."""

__all__ = [
    "GraphConstructionError",
    "DTypeError",
    "DTypeMismatchError",
    "ShapeMismatchError",
    "RankError",
    "InvalidArgumentError",
    "GraphMismatchError",
    "InvalidIndexError",
    "DuplicateNameError",
    "GraphFinalizedError",
    "EvaluationError",
    "FeedMismatchError",
]


class GraphConstructionError(Exception):
    """Base class of errors raised while building a graph."""

    pass


class DTypeError(GraphConstructionError, TypeError):
    """Raised when a dtype is not supported by an operator or operands do not promote."""

    pass


class DTypeMismatchError(DTypeError):
    """Raised when a tensor dtype disagrees with its producing operation."""

    pass


class ShapeMismatchError(GraphConstructionError, ValueError):
    """Raised when shapes fail to broadcast or merge."""

    pass


class RankError(GraphConstructionError, ValueError):
    """Raised when a tensor rank is too small for an operation."""

    pass


class InvalidArgumentError(GraphConstructionError, ValueError):
    """Raised on mutually exclusive or out of domain arguments."""

    pass


class GraphMismatchError(GraphConstructionError, ValueError):
    """Raised when operands belong to different graphs."""

    pass


class InvalidIndexError(GraphConstructionError, IndexError):
    """Raised when an output slot index is out of range."""

    pass


class DuplicateNameError(GraphConstructionError, ValueError):
    """Raised when an operation name is already used in a graph."""

    pass


class GraphFinalizedError(GraphConstructionError, RuntimeError):
    """Raised when adding operations to a finalized graph."""

    pass


class EvaluationError(RuntimeError):
    """Raised when a session fails to evaluate the requested tensors."""

    pass


class FeedMismatchError(EvaluationError):
    """Raised when a fed value does not match the placeholder type."""

    pass
