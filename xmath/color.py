"""
Color value type: an RGBA color whose channels are Percentages.

Only numeric channels are handled here; color-space string parsing and
formatting are left to callers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import RangeError
from .geometric import Vector
from .percentage import Percentage
from .value import MathValue, fuzzy_compare


class Color(MathValue, BaseModel):
    """
    A color in the RGBA space, each channel a Percentage in ``[0, 1]``.

    Examples:
        >>> Color(0.25, 0.5, 1).rgb
        (Percentage(25%), Percentage(50%), Percentage(100%), Percentage(100%))
        >>> Color()
        Color(0%, 0%, 0%, 0%)
    """

    model_config = ConfigDict(frozen=True)

    red: Percentage
    green: Percentage
    blue: Percentage
    alpha: Percentage

    def __init__(self, *channels: Percentage | float | int) -> None:
        """
        Initialize a Color.

        Args:
            channels: none (transparent black), three (red, green, blue; opaque),
                or four (red, green, blue, alpha)

        Raises:
            TypeError: For any other number of channels
            DomainError: If a channel is negative
            RangeError: If a channel exceeds 1
        """
        if len(channels) == 0:
            channels = (0, 0, 0, 0)
        elif len(channels) == 3:
            channels = (*channels, 1)
        elif len(channels) != 4:
            raise TypeError(f"Color expects 0, 3 or 4 channels, got {len(channels)}")

        names = ('red', 'green', 'blue', 'alpha')
        super().__init__(**{
            name: self._coerce_channel(name, value) for name, value in zip(names, channels)
        })

    @staticmethod
    def _coerce_channel(name: str, value: Any) -> Percentage:
        channel = Percentage(value)
        if Percentage.MULT_IDEN.less_than(channel):
            raise RangeError(f"Color channel {name} must not exceed 100%, got {channel.to_string()}")
        return channel

    @property
    def rgb(self) -> tuple[Percentage, Percentage, Percentage, Percentage]:
        """The channels in (red, green, blue, alpha) order."""
        return (self.red, self.green, self.blue, self.alpha)

    def invert(self) -> Color:
        """Replace each color channel by its conjugate, keeping alpha."""
        return Color(self.red.conjugate, self.green.conjugate, self.blue.conjugate, self.alpha)

    def mix(self, other: Color, weight: Percentage | float = 0.5) -> Color:
        """
        Blend with another color, channel by channel.

        Args:
            other: The color to mix in
            weight: How much of ``other`` to use; 0 keeps this color, 1 gives ``other``
        """
        weight = Percentage(weight)
        keep = weight.conjugate
        return Color(*(
            Percentage(keep.of(mine.value) + weight.of(theirs.value)).clamp()
            for mine, theirs in zip(self.rgb, other.rgb)
        ))

    def to_vector(self) -> Vector:
        """Channel values as a 4-dimensional Vector."""
        return Vector([channel.value for channel in self.rgb])

    def compare(
        self, other: Any, tolerance: float | None = None, mode: str | None = None
    ) -> bool:
        """Compare colors channel-wise."""
        if not isinstance(other, Color):
            return False
        return all(
            fuzzy_compare(a.value, b.value, tolerance, mode) for a, b in zip(self.rgb, other.rgb)
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.rgb == other.rgb

    def __hash__(self) -> int:
        return hash(self.rgb)

    def to_string(self) -> str:
        return ", ".join(channel.to_string() for channel in self.rgb)

    def to_tex(self) -> str:
        return ", ".join(channel.to_tex() for channel in self.rgb)

    def to_python(self) -> tuple[float, float, float, float]:
        """Convert to a tuple of channel floats."""
        return tuple(channel.value for channel in self.rgb)
