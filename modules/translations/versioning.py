"""Three-segment dataset version with carry."""

from dataclasses import dataclass
from itertools import zip_longest
from typing import Optional

DEFAULT_VERSION = "1.0.0"
SEGMENT_LIMIT = 100


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` version.

    Patch and minor roll over at 100 into the next segment; major is
    unbounded. There is no way to go back down.
    """

    major: int = 1
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Version":
        """Parse ``"X.Y.Z"``.

        Missing trailing segments count as 0 and an empty value gives
        ``1.0.0``.

        Raises:
            ValueError: If a segment is not a non-negative integer.
        """
        if not value:
            value = DEFAULT_VERSION
        parts = str(value).strip().split(".")
        if len(parts) > 3:
            raise ValueError(f"Invalid version: {value}")
        try:
            numbers = [int(part) for part in parts]
        except ValueError as e:
            raise ValueError(f"Invalid version: {value}") from e
        if any(number < 0 for number in numbers):
            raise ValueError(f"Invalid version: {value}")
        numbers += [0] * (3 - len(numbers))
        return cls(*numbers)

    def bump(self) -> "Version":
        major, minor, patch = self.major, self.minor, self.patch + 1
        if patch >= SEGMENT_LIMIT:
            patch = 0
            minor += 1
        if minor >= SEGMENT_LIMIT:
            minor = 0
            major += 1
        return Version(major, minor, patch)


def compare_versions(first: str, second: str) -> int:
    """Compare two dotted versions segment by segment.

    Non-numeric segments count as 0, so malformed client input never raises.

    Returns:
        1 if ``first`` is newer, -1 if older, 0 if equal.
    """

    def _segments(value: str) -> list[int]:
        result = []
        for part in (value or "0").split("."):
            try:
                result.append(int(part))
            except ValueError:
                result.append(0)
        return result

    for a, b in zip_longest(_segments(first), _segments(second), fillvalue=0):
        if a > b:
            return 1
        if a < b:
            return -1
    return 0
