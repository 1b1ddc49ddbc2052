"""ParseConfig and BuildStrategy for document parsing.

ParseConfig is a frozen (immutable) dataclass holding the parse options.
BuildStrategy selects how the node tree is built from the decoded value:
all at once (eager) or on first visit (lazy).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["BuildStrategy", "ParseConfig"]


class BuildStrategy(StrEnum):
    """How decoded JSON values are turned into nodes.

    - EAGER: Convert the whole document in one recursive pass.
    - LAZY:  Wrap only the root; build and cache children on first visit.
    """

    EAGER = auto()
    LAZY = auto()


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable configuration for ``parse``.

    Attributes:
        strategy: Node construction strategy.  Plain strings ("eager",
            "lazy") are accepted and coerced to ``BuildStrategy``.
        thread_safe: When True, lazy containers guard their child cache with
            a lock so concurrent first visits return the same instance.
            Ignored by the eager strategy.  Default True.
    """

    strategy: BuildStrategy = BuildStrategy.EAGER
    thread_safe: bool = True

    def __post_init__(self) -> None:
        try:
            strategy = BuildStrategy(self.strategy)
        except ValueError:
            choices = [s.value for s in BuildStrategy]
            msg = f"strategy must be one of {choices}, got {self.strategy!r}"
            raise ValueError(msg) from None
        # frozen dataclass: bypass __setattr__ to store the coerced enum
        object.__setattr__(self, "strategy", strategy)
        if not isinstance(self.thread_safe, bool):
            msg = f"thread_safe must be a bool, got {type(self.thread_safe).__name__}"
            raise ValueError(msg)
