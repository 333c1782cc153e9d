# contextree/bindings/flag.py
from __future__ import annotations
from dataclasses import dataclass

from .names import FlagName

__all__ = ["Flag"]



@dataclass(frozen=True)
class Flag:
    # Equality/hash by name only, so set membership is "is this flag set"
    name: FlagName
