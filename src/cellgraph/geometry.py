"""Minimal planar geometry used by the spatial lookups."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_dict(cls, data: dict | None) -> "Point":
        data = data or {}
        return cls(float(data.get("x", 0)), float(data.get("y", 0)))

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "Rect":
        return cls(
            float(data.get("x", 0)),
            float(data.get("y", 0)),
            float(data.get("width", 0)),
            float(data.get("height", 0)),
        )

    @classmethod
    def from_points(cls, points: list[Point]) -> "Rect | None":
        """Smallest rectangle containing all points (None for no points)."""
        if not points:
            return None
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def origin(self) -> Point:
        return Point(self.x, self.y)

    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def point(self, name: str) -> Point:
        """Named point of the rectangle ("center", "origin", "top-right", ...)."""
        key = name.replace("_", "-").lower()
        points = {
            "center": self.center(),
            "origin": self.origin(),
            "top-left": self.origin(),
            "corner": Point(self.right, self.bottom),
            "bottom-right": Point(self.right, self.bottom),
            "top-right": Point(self.right, self.y),
            "bottom-left": Point(self.x, self.bottom),
            "top-middle": Point(self.x + self.width / 2, self.y),
            "bottom-middle": Point(self.x + self.width / 2, self.bottom),
            "left-middle": Point(self.x, self.y + self.height / 2),
            "right-middle": Point(self.right, self.y + self.height / 2),
        }
        if key not in points:
            raise ValueError(f"Unknown rectangle point: {name}")
        return points[key]

    def contains_point(self, point: Point, strict: bool = False) -> bool:
        if strict:
            return self.x < point.x < self.right and self.y < point.y < self.bottom
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def contains_rect(self, other: "Rect") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: "Rect") -> bool:
        return not (
            other.x > self.right
            or other.right < self.x
            or other.y > self.bottom
            or other.bottom < self.y
        )

    def union(self, other: "Rect") -> "Rect":
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return Rect(x, y, max(self.right, other.right) - x, max(self.bottom, other.bottom) - y)

    def rotated_bbox(self, angle: float) -> "Rect":
        """Bounding box of this rectangle rotated by `angle` degrees about its center."""
        if not angle % 360:
            return self
        c = self.center()
        rad = math.radians(angle)
        cos, sin = math.cos(rad), math.sin(rad)
        corners = [
            Point(self.x, self.y),
            Point(self.right, self.y),
            Point(self.right, self.bottom),
            Point(self.x, self.bottom),
        ]
        rotated = [
            Point(
                c.x + (p.x - c.x) * cos - (p.y - c.y) * sin,
                c.y + (p.x - c.x) * sin + (p.y - c.y) * cos,
            )
            for p in corners
        ]
        return Rect.from_points(rotated)
