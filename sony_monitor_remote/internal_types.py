# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Type hints shared by all modules in this package. Intended to be star-imported.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    TextIO,
    Tuple,
    Type,
    Union,
    cast,
  )

from types import TracebackType

from typing_extensions import Self

Jsonable = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]
"""A value that can be serialized to JSON."""

JsonableDict = Dict[str, Jsonable]
"""A JSON object."""

StatusWords = Tuple[int, int, int, int, int]
"""The five 16-bit status words returned by a status poll, w1..w5."""
