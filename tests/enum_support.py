"""Data types referenced by the data-field tests' generated modules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Left:
    precedence: int


@dataclass(frozen=True)
class Right:
    precedence: int
