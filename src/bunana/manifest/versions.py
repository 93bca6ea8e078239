"""OSGi version and version range values."""

from __future__ import annotations

import re
from dataclasses import dataclass

_QUALIFIER_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_NUMBER_RE = re.compile(r"^[0-9]+$")


@dataclass(slots=True, frozen=True, order=True)
class Version:
    """``major.minor.micro[.qualifier]`` version."""

    major: int = 0
    minor: int = 0
    micro: int = 0
    qualifier: str = ""

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string; empty text yields ``0.0.0``."""
        stripped = text.strip()
        if not stripped:
            return cls()
        parts = stripped.split(".", 3)
        numbers: list[int] = []
        for part in parts[:3]:
            if not _NUMBER_RE.match(part):
                raise ValueError(f"Invalid version {text!r}: {part!r} is not a non-negative integer.")
            numbers.append(int(part))
        qualifier = ""
        if len(parts) == 4:
            qualifier = parts[3]
            if not _QUALIFIER_RE.match(qualifier):
                raise ValueError(f"Invalid version {text!r}: bad qualifier {qualifier!r}.")
        while len(numbers) < 3:
            numbers.append(0)
        return cls(major=numbers[0], minor=numbers[1], micro=numbers[2], qualifier=qualifier)

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.micro}"
        if self.qualifier:
            return f"{base}.{self.qualifier}"
        return base


@dataclass(slots=True, frozen=True)
class VersionRange:
    """Interval of versions; ``ceiling`` of None means unbounded."""

    floor: Version
    floor_inclusive: bool = True
    ceiling: Version | None = None
    ceiling_inclusive: bool = False

    @classmethod
    def parse(cls, text: str) -> VersionRange:
        """Parse ``[1.0,2.0)`` style intervals or a bare floor version."""
        stripped = text.strip()
        if not stripped or stripped[0] not in "[(":
            return cls(floor=Version.parse(stripped))
        if stripped[-1] not in ")]":
            raise ValueError(f"Invalid version range {text!r}: missing closing bracket.")
        body = stripped[1:-1]
        floor_text, comma, ceiling_text = body.partition(",")
        if not comma:
            raise ValueError(f"Invalid version range {text!r}: expected 'floor,ceiling'.")
        return cls(
            floor=Version.parse(floor_text),
            floor_inclusive=stripped[0] == "[",
            ceiling=Version.parse(ceiling_text),
            ceiling_inclusive=stripped[-1] == "]",
        )

    def __str__(self) -> str:
        if self.ceiling is None:
            return str(self.floor)
        left = "[" if self.floor_inclusive else "("
        right = "]" if self.ceiling_inclusive else ")"
        return f"{left}{self.floor},{self.ceiling}{right}"
