"""
Half-star rating control.

Headless model of a row of five star slots. Each slot is split into a left
zone worth ``i + 0.5`` and a right zone worth ``i + 1``; the page shell maps
pointer events onto ``pointer_enter`` / ``pointer_leave`` / ``activate`` and
paints whatever ``render()`` returns.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable

STAR_COUNT = 5

SELECTED_COLOR = "#00e054"
PREVIEW_COLOR = "#3b82f6"
NEUTRAL_COLOR = "rgba(255,255,255,0.2)"


class Half(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Fill(str, Enum):
    FULL = "full"
    HALF = "half"
    EMPTY = "empty"


@dataclass(frozen=True)
class Zone:
    slot: int
    half: Half

    @property
    def value(self) -> float:
        return self.slot + (0.5 if self.half is Half.LEFT else 1.0)

    @property
    def label(self) -> str:
        return f"Rate {self.value:g} stars"


@dataclass(frozen=True)
class SlotView:
    index: int
    fill: Fill
    color: str


def zones() -> list[Zone]:
    return [Zone(slot, half) for slot in range(STAR_COUNT) for half in (Half.LEFT, Half.RIGHT)]


def hit_test(slot: int, offset_x: float, width: float) -> Zone | None:
    """Resolve a pointer x-offset inside a slot's box to its left or right zone."""
    if not 0 <= slot < STAR_COUNT or width <= 0 or not 0 <= offset_x < width:
        return None
    return Zone(slot, Half.LEFT if offset_x < width / 2 else Half.RIGHT)


def slot_fill(index: int, displayed: float) -> Fill:
    if displayed >= index + 1:
        return Fill.FULL
    if index + 0.5 <= displayed < index + 1:
        return Fill.HALF
    return Fill.EMPTY


class StarRating:
    """Rating control state: committed ``value`` plus an optional hover preview.

    ``hover_value`` is None while idle. Activation commits through
    ``on_change`` and leaves the hover state alone.
    """

    def __init__(self, value: float = 0, on_change: Callable[[float], None] | None = None):
        self.value = value
        self.on_change = on_change
        self.hover_value: float | None = None

    @property
    def hovering(self) -> bool:
        return self.hover_value is not None

    @property
    def displayed(self) -> float:
        return self.hover_value if self.hovering else self.value

    @property
    def previewing(self) -> bool:
        return self.hovering and self.hover_value > self.value

    def pointer_enter(self, zone: Zone) -> None:
        self.hover_value = zone.value

    def pointer_leave(self) -> None:
        self.hover_value = None

    def activate(self, zone: Zone) -> None:
        self.value = zone.value
        if self.on_change is not None:
            self.on_change(zone.value)

    def reset(self) -> None:
        self.value = 0
        self.hover_value = None

    def render(self) -> list[SlotView]:
        displayed = self.displayed
        filled_color = PREVIEW_COLOR if self.previewing else SELECTED_COLOR
        views = []
        for index in range(STAR_COUNT):
            fill = slot_fill(index, displayed)
            color = NEUTRAL_COLOR if fill is Fill.EMPTY else filled_color
            views.append(SlotView(index, fill, color))
        return views
