"""
Angle: an immutable angle in radians.

Angle subclasses float so it can be handed to anything that expects a plain
number of radians, while adding normalization and classification helpers.
"""

from __future__ import annotations
import math
from numbers import Real
from typing import ClassVar

from .numeric import safe_divide

TWO_PI = 2.0 * math.pi


class Angle(float):
    """An angle stored in radians."""

    ZERO: ClassVar[Angle]
    RIGHT: ClassVar[Angle]
    STRAIGHT: ClassVar[Angle]
    COMPLETE: ClassVar[Angle]
    UNDEFINED: ClassVar[Angle]
    MULTI: ClassVar[Angle]

    def __new__(cls, radians: float = 0.0):
        return super().__new__(cls, radians)

    @classmethod
    def from_degrees(cls, degrees: float) -> Angle:
        return cls(math.radians(degrees))

    @classmethod
    def parse(cls, text: str) -> Angle:
        """
        Parse an angle from text.

        Accepted forms are multiples of pi ("0.5π", "0.5pi"), degrees ("90°",
        "90deg") and plain radians ("1.2").
        """
        s = text.strip().lower()
        for suffix in ("π", "pi"):
            if s.endswith(suffix):
                factor = s[:-len(suffix)].strip()
                return cls(float(factor or 1.0) * math.pi)
        for suffix in ("°", "deg"):
            if s.endswith(suffix):
                return cls.from_degrees(float(s[:-len(suffix)]))
        return cls(float(s))

    @property
    def radians(self) -> float:
        return float(self)

    @property
    def degrees(self) -> float:
        return math.degrees(float(self))

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def normalize(self) -> Angle:
        """Equivalent angle in the range (-π, π]."""
        result = float(self) % TWO_PI
        if result > math.pi:
            result -= TWO_PI
        return Angle(result)

    def normalize_to_2pi(self) -> Angle:
        """Equivalent angle in the range [0, 2π)."""
        result = float(self) % TWO_PI
        # Tiny negative inputs round up to exactly 2π under float modulo
        if result >= TWO_PI:
            result -= TWO_PI
        return Angle(result)

    def explement(self) -> Angle:
        """The angle that makes a complete turn when added to this one (sign kept)."""
        return Angle(self.sign() * TWO_PI - float(self))

    def sign(self) -> int:
        """-1, 0 or 1."""
        value = float(self)
        if value > 0:
            return 1
        if value < 0:
            return -1
        return 0

    # ------------------------------------------------------------------
    # Trigonometry
    # ------------------------------------------------------------------

    def sin(self) -> float:
        return math.sin(self)

    def cos(self) -> float:
        return math.cos(self)

    def tan(self) -> float:
        return math.tan(self)

    def direction(self):
        """Unit vector in the XY plane pointing along this angle."""
        from .vector import Vector
        return Vector.from_angle(self)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_acute(self) -> bool:
        return 0.0 < abs(float(self)) < math.pi / 2

    def is_obtuse(self) -> bool:
        return math.pi / 2 < abs(float(self)) < math.pi

    def is_reflex(self) -> bool:
        return math.pi < abs(float(self)) < TWO_PI

    def is_undefined(self) -> bool:
        return math.isnan(self)

    def is_multi(self) -> bool:
        """True for the sentinel used when a selection holds differing angles."""
        return float(self) == -math.inf

    # ------------------------------------------------------------------
    # Arithmetic (results stay Angles)
    # ------------------------------------------------------------------
    # Non-scalar operands (e.g. numpy arrays) get NotImplemented so they can
    # broadcast the plain radian value themselves.

    def __add__(self, other) -> Angle:
        if not isinstance(other, Real):
            return NotImplemented
        return Angle(float(self) + float(other))

    def __radd__(self, other) -> Angle:
        if not isinstance(other, Real):
            return NotImplemented
        return Angle(float(other) + float(self))

    def __sub__(self, other) -> Angle:
        if not isinstance(other, Real):
            return NotImplemented
        return Angle(float(self) - float(other))

    def __rsub__(self, other) -> Angle:
        if not isinstance(other, Real):
            return NotImplemented
        return Angle(float(other) - float(self))

    def __mul__(self, factor) -> Angle:
        if not isinstance(factor, Real):
            return NotImplemented
        return Angle(float(self) * float(factor))

    def __rmul__(self, factor) -> Angle:
        if not isinstance(factor, Real):
            return NotImplemented
        return Angle(float(factor) * float(self))

    def __truediv__(self, divisor) -> Angle:
        if not isinstance(divisor, Real):
            return NotImplemented
        return Angle(safe_divide(float(self), float(divisor)))

    def __neg__(self) -> Angle:
        return Angle(-float(self))

    def __abs__(self) -> Angle:
        return Angle(abs(float(self)))

    def __repr__(self) -> str:
        return f"Angle({float(self)!r})"

    def __str__(self) -> str:
        if self.is_undefined():
            return "Undefined"
        if self.is_multi():
            return "Multi"
        return f"{float(self) / math.pi:g}π"


Angle.ZERO = Angle(0.0)
Angle.RIGHT = Angle(math.pi / 2)
Angle.STRAIGHT = Angle(math.pi)
Angle.COMPLETE = Angle(TWO_PI)
Angle.UNDEFINED = Angle(math.nan)
Angle.MULTI = Angle(-math.inf)
