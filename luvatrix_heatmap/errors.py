from __future__ import annotations

from dataclasses import dataclass


class HeatmapConfigError(ValueError):
    """Raised when a draw call cannot produce a well-formed grid."""


class HeatmapDataError(ValueError):
    """Raised when series values cannot be coerced to finite numbers."""


@dataclass(frozen=True)
class DegenerateRangeWarning:
    series_index: int
    point_index: int
    total: float

    def message(self) -> str:
        return (
            f"series {self.series_index} point {self.point_index}: "
            f"color bounds span {self.total!r}, shading as neutral"
        )
