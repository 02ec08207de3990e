"""Tagged result returned by run_gate.

``Ok(None)`` means the run was not applicable (no pull request).
``Ok(Decision)`` carries the gate outcome, pass or fail.
``Err(GateError)`` carries a configuration or upstream failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from reviewgate_core.errors import GateError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: GateError


Result = Union[Ok[T], Err]
