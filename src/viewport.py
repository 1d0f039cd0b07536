"""
Zoom and pan state for the pedigree canvas.

- Wheel zoom keeps the point under the cursor fixed
- Left-button drag pans
- Fit-to-view and reset helpers
"""

from enum import Enum

from config import settings
from models import Bounds, ViewportTransform

INITIAL_TRANSFORM = ViewportTransform(x=400, y=400, scale=1.0)
MIN_SCALE = 0.1
MAX_SCALE = 5.0
WHEEL_ZOOM_FACTOR = 0.001  # scale change per wheel delta unit
ZOOM_STEP = 0.2  # zoom buttons
LEFT_BUTTON = 0


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


def clamp_scale(scale: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, scale))


class Viewport:
    """Transform applied to the layout: screen = offset + scale * layout."""

    def __init__(
        self,
        width: float | None = None,
        height: float | None = None,
        padding: float | None = None,
        initial: ViewportTransform = INITIAL_TRANSFORM,
    ):
        self.width = settings.viewport_width if width is None else width
        self.height = settings.viewport_height if height is None else height
        self.padding = settings.fit_padding if padding is None else padding
        self._initial = initial
        self.transform = initial
        self.drag_state = DragState.IDLE
        self._last_pointer = (0.0, 0.0)

    def _zoom_at(self, new_scale: float, cursor_x: float, cursor_y: float) -> ViewportTransform:
        t = self.transform
        new_scale = clamp_scale(new_scale)
        factor = new_scale / t.scale
        self.transform = ViewportTransform(
            x=cursor_x - (cursor_x - t.x) * factor,
            y=cursor_y - (cursor_y - t.y) * factor,
            scale=new_scale,
        )
        return self.transform

    def wheel(self, delta_y: float, cursor_x: float, cursor_y: float) -> ViewportTransform:
        """Zoom by a wheel event; cursor position is relative to the canvas."""
        return self._zoom_at(self.transform.scale - delta_y * WHEEL_ZOOM_FACTOR, cursor_x, cursor_y)

    def zoom_in(self) -> ViewportTransform:
        return self._zoom_at(self.transform.scale + ZOOM_STEP, self.width / 2, self.height / 2)

    def zoom_out(self) -> ViewportTransform:
        return self._zoom_at(self.transform.scale - ZOOM_STEP, self.width / 2, self.height / 2)

    @property
    def is_dragging(self) -> bool:
        return self.drag_state is DragState.DRAGGING

    def pointer_down(self, x: float, y: float, button: int = LEFT_BUTTON):
        # Only drag on left click
        if button != LEFT_BUTTON:
            return
        self.drag_state = DragState.DRAGGING
        self._last_pointer = (x, y)

    def pointer_move(self, x: float, y: float) -> ViewportTransform:
        if self.drag_state is DragState.DRAGGING:
            last_x, last_y = self._last_pointer
            t = self.transform
            self.transform = ViewportTransform(x=t.x + x - last_x, y=t.y + y - last_y, scale=t.scale)
            self._last_pointer = (x, y)
        return self.transform

    def pointer_up(self):
        self.drag_state = DragState.IDLE

    def pointer_leave(self):
        self.drag_state = DragState.IDLE

    def cancel_drag(self):
        """Focus loss mid-drag."""
        self.drag_state = DragState.IDLE

    def fit_to_view(self, bounds: Bounds) -> ViewportTransform:
        """Scale and center the content box; never zooms in past 1x, never clamped below."""
        available_w = self.width - self.padding * 2
        available_h = self.height - self.padding * 2

        ratios = [1.0]
        if bounds.width > 0:
            ratios.append(available_w / bounds.width)
        if bounds.height > 0:
            ratios.append(available_h / bounds.height)
        new_scale = min(ratios)

        center_x = bounds.min_x + bounds.width / 2
        center_y = bounds.min_y + bounds.height / 2
        self.transform = ViewportTransform(
            x=self.width / 2 - center_x * new_scale,
            y=self.height / 2 - center_y * new_scale,
            scale=new_scale,
        )
        return self.transform

    def reset(self) -> ViewportTransform:
        self.transform = self._initial
        self.drag_state = DragState.IDLE
        return self.transform
