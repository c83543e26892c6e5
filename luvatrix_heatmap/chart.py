from __future__ import annotations

import logging
import threading
from typing import Any, Sequence
import uuid

from .errors import HeatmapConfigError
from .options import DEFAULT_OPTIONS, HeatmapOptions, RenderFlags
from .ports import AnimationPort
from .renderer import HeatmapDrawResult, HeatmapRenderer
from .scene import RecordingAnimator, SceneSurface
from .transitions import EMPTY_RENDER_STATE, PreviousRenderState

LOGGER = logging.getLogger(__name__)


class HeatmapChart:
    """One heatmap chart instance and the colors of its last completed draw.

    Draws are serialized per instance; the render snapshot is replaced as a
    whole once a draw finishes and left untouched when a draw fails.
    """

    def __init__(
        self,
        options: HeatmapOptions = DEFAULT_OPTIONS,
        *,
        chart_id: str | None = None,
        surface: SceneSurface | None = None,
        animator: AnimationPort | None = None,
    ) -> None:
        self.options = options
        self.chart_id = chart_id or uuid.uuid4().hex[:8]
        self.surface = surface or SceneSurface()
        self.animator = animator
        self._lock = threading.Lock()
        self._state = EMPTY_RENDER_STATE
        self._series: Any = None
        self._colors: tuple[str, ...] = ()
        self._size: tuple[float, float] | None = None
        self.last_result: HeatmapDrawResult | None = None

    @property
    def previous_state(self) -> PreviousRenderState:
        return self._state

    def draw(
        self,
        series: Any,
        colors: Sequence[str],
        width: float,
        height: float,
        *,
        data_changed: bool = False,
        resized: bool = False,
        has_negative_values: bool | None = None,
    ) -> HeatmapDrawResult:
        flags = RenderFlags(data_changed=data_changed, resized=resized, has_negative_values=has_negative_values)
        with self._lock:
            if isinstance(self.animator, RecordingAnimator):
                # Records describe the latest draw only.
                self.animator.clear()
            renderer = HeatmapRenderer(
                self.surface,
                self.options,
                animator=self.animator,
                labels=self.surface,
                filters=self.surface,
                chart_id=self.chart_id,
            )
            result = renderer.draw(series, colors, width, height, flags=flags, previous=self._state)
            self._state = result.next_state
            self._series = series
            self._colors = tuple(colors)
            self._size = (width, height)
            self.last_result = result
            LOGGER.debug("heatmap chart=%s stored render snapshot of %d cells", self.chart_id, len(result.next_state))
            return result

    def update_series(self, series: Any, colors: Sequence[str] | None = None) -> HeatmapDrawResult:
        width, height = self._require_size()
        return self.draw(series, colors or self._colors, width, height, data_changed=True)

    def resize(self, width: float, height: float) -> HeatmapDrawResult:
        self._require_size()
        return self.draw(self._series, self._colors, width, height, resized=True)

    def _require_size(self) -> tuple[float, float]:
        if self._size is None:
            raise HeatmapConfigError("chart has not been drawn yet")
        return self._size
