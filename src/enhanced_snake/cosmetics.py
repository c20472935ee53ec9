"""Cosmetic choices offered between games: head mode, colors, eyes, food."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class HeadMode(enum.Enum):
    """How many heads the snake has.

    In ``DOUBLE_HEAD`` mode the tail end is drawn as a second head.
    """

    NORMAL = "normal"
    DOUBLE_HEAD = "double_head"

    @property
    def heads(self) -> int:
        return 2 if self is HeadMode.DOUBLE_HEAD else 1


class SnakeColor(enum.Enum):
    """Body colors. ``RAINBOW`` cycles hue per segment."""

    BLACK = "#000000"
    RED = "#FF0000"
    BLUE = "#0000FF"
    YELLOW = "#FFFF00"
    ORANGE = "#FFA500"
    PINK = "#FFC0CB"
    BROWN = "#A52A2A"
    RAINBOW = "rainbow"

    def segment_color(self, index: int) -> str:
        """Return the CSS color for the segment at *index*."""
        if self is SnakeColor.RAINBOW:
            return f"hsl({(index * 30) % 360}, 100%, 50%)"
        return self.value


class EyeStyle(enum.Enum):
    NORMAL = "normal"
    ANGRY = "angry"
    CUTE = "cute"
    SLEEPY = "sleepy"


class FoodKind(enum.Enum):
    """Food sprites. All of them share the chewing sound."""

    APPLE = "apple"
    WATERMELON = "watermelon"
    CHERRY = "cherry"
    KIWI = "kiwi"
    BANANA = "banana"
    BERRY = "berry"
    CHILLI = "chilli"
    RABBIT = "rabbit"
    FROG = "frog"
    TORTOISE = "tortoise"
    CHEESE = "cheese"
    MUSHROOM = "mushroom"
    CARROT = "carrot"
    TOMATO = "tomato"

    @property
    def color(self) -> str:
        return _FOOD_COLORS[self]


_FOOD_COLORS: dict[FoodKind, str] = {
    FoodKind.APPLE: "#e74c3c",
    FoodKind.WATERMELON: "#2ecc71",
    FoodKind.CHERRY: "#9b59b6",
    FoodKind.KIWI: "#27ae60",
    FoodKind.BANANA: "#f1c40f",
    FoodKind.BERRY: "#8e44ad",
    FoodKind.CHILLI: "#c0392b",
    FoodKind.RABBIT: "#95a5a6",
    FoodKind.FROG: "#2ecc71",
    FoodKind.TORTOISE: "#34495e",
    FoodKind.CHEESE: "#f39c12",
    FoodKind.MUSHROOM: "#ecf0f1",
    FoodKind.CARROT: "#e67e22",
    FoodKind.TOMATO: "#e74c3c",
}


def _lookup(enum_cls: type[enum.Enum], name: str, label: str):
    try:
        return enum_cls[name.strip().upper()]
    except KeyError:
        choices = ", ".join(m.name.lower() for m in enum_cls)
        raise ValueError(
            f"Unknown {label} '{name}'. Choose one of: {choices}.",
        ) from None


@dataclass(frozen=True)
class Settings:
    """Cosmetic selection for one game."""

    head_mode: HeadMode = HeadMode.NORMAL
    color: SnakeColor = SnakeColor.BLACK
    eyes: EyeStyle = EyeStyle.NORMAL
    food: FoodKind = FoodKind.APPLE

    def eyed_segments(self, length: int) -> list[int]:
        """Indices of the segments drawn with eyes for a snake of *length*."""
        if length <= 0:
            return []
        if self.head_mode is HeadMode.DOUBLE_HEAD and length > 1:
            return [0, length - 1]
        return [0]

    def to_dict(self) -> dict:
        return {
            "head_mode": self.head_mode.value,
            "color": self.color.name.lower(),
            "eyes": self.eyes.value,
            "food": self.food.value,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> Settings:
        """Build settings from names, keeping defaults for missing keys."""
        default = cls()
        values = {}
        for key, enum_cls, label in _SETTING_FIELDS:
            name = raw.get(key)
            values[key] = (
                _lookup(enum_cls, name, label)
                if name is not None else getattr(default, key)
            )
        return cls(**values)


_SETTING_FIELDS: list[tuple[str, type[enum.Enum], str]] = [
    ("head_mode", HeadMode, "head mode"),
    ("color", SnakeColor, "snake color"),
    ("eyes", EyeStyle, "eye style"),
    ("food", FoodKind, "food"),
]


def catalog() -> dict[str, list[str]]:
    """Return every cosmetic choice by name."""
    return {
        "head_mode": [m.value for m in HeadMode],
        "color": [m.name.lower() for m in SnakeColor],
        "eyes": [m.value for m in EyeStyle],
        "food": [m.value for m in FoodKind],
    }
