"""Batches sprites, health bars and flame particles into triangle lists for drawing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from .geometry import Color, FloatRect, Vector2
from .player import Player

CIRCLE_SEGMENTS = 50
FLAME_BASE_RADIUS = 10.0

_UNIT_CIRCLE: tuple[Vector2, ...] = tuple(
    Vector2(math.cos(2 * math.pi * i / CIRCLE_SEGMENTS), math.sin(2 * math.pi * i / CIRCLE_SEGMENTS))
    for i in range(CIRCLE_SEGMENTS + 1)
)


@dataclass(frozen=True)
class Vertex:
    """A triangle corner with a colour and, for textured triangles, a texture coordinate."""

    position: Vector2
    colour: Color
    tex_coords: Vector2 | None = None


@dataclass
class DrawCall:
    """Triangles drawn together with one texture (or none) and one blend mode."""

    texture: str | None
    vertices: list[Vertex] = field(default_factory=list)
    additive: bool = False


class Flame(Protocol):
    """A flame particle: a glowing disc."""

    position: Vector2
    colour: Color
    size: float


def quad_vertices(
    corners: Sequence[Vector2], texture_frame: FloatRect, colour: Color
) -> list[Vertex]:
    """Two textured triangles for corners given as top-left, top-right, bottom-left, bottom-right."""
    top_left, top_right, bottom_left, bottom_right = corners
    left = texture_frame.position.x
    top = texture_frame.position.y
    right = left + texture_frame.size.x
    bottom = top + texture_frame.size.y
    tl = Vertex(top_left, colour, Vector2(left, top))
    tr = Vertex(top_right, colour, Vector2(right, top))
    bl = Vertex(bottom_left, colour, Vector2(left, bottom))
    br = Vertex(bottom_right, colour, Vector2(right, bottom))
    return [tl, tr, bl, bl, br, tr]


def rectangle_vertices(rect: FloatRect, colour: Color) -> list[Vertex]:
    """Two untextured triangles covering an axis-aligned rectangle."""
    left, top = rect.position.x, rect.position.y
    right, bottom = left + rect.size.x, top + rect.size.y
    tl = Vertex(Vector2(left, top), colour)
    tr = Vertex(Vector2(right, top), colour)
    bl = Vertex(Vector2(left, bottom), colour)
    br = Vertex(Vector2(right, bottom), colour)
    return [tl, tr, bl, bl, br, tr]


def flame_triangles(flames: Iterable[Flame]) -> list[Vertex]:
    """A fan of triangles approximating a disc for each flame."""
    vertices: list[Vertex] = []
    for flame in flames:
        center = flame.position
        colour = flame.colour
        radius = FLAME_BASE_RADIUS * flame.size
        ring = [center + point * radius for point in _UNIT_CIRCLE]
        for first, second in zip(ring, ring[1:]):
            vertices.extend((Vertex(center, colour), Vertex(first, colour), Vertex(second, colour)))
    return vertices


def draw_order(characters: Iterable) -> list:
    """Dead characters first, then by the bottom edge of their sprite, top to bottom."""
    return sorted(characters, key=lambda character: (not character.is_dead(), character.y_ordering()))


def _sprite_vertices(sprite) -> list[Vertex]:
    return quad_vertices(sprite.corners(), sprite.texture_rect, sprite.color)


def _hp_bar_vertices(character) -> list[Vertex]:
    vertices: list[Vertex] = []
    for rect in character.hud.rectangles():
        vertices.extend(rectangle_vertices(rect.global_bounds(), rect.fill_color))
    return vertices


class BatchRenderer:
    """Groups character sprites by texture so each group is drawn at once."""

    def __init__(self) -> None:
        self.flame_vertices: list[Vertex] = []

    def batch_characters(self, characters: Iterable) -> list[DrawCall]:
        """Draw calls for the characters in depth order, health bars last.

        Monsters are batched by texture; a player flushes the monsters above it
        so it is drawn on top of them.
        """
        calls: list[DrawCall] = []
        monster_batches: dict[str, list[Vertex]] = {}
        hp_bars: list[Vertex] = []

        def flush() -> None:
            calls.extend(
                DrawCall(texture, vertices) for texture, vertices in monster_batches.items() if vertices
            )
            monster_batches.clear()

        for character in draw_order(characters):
            alive = not character.is_dead()
            if isinstance(character, Player):
                flush()
                if alive:
                    hp_bars.extend(_hp_bar_vertices(character))
                calls.append(DrawCall(character.sprite.texture, _sprite_vertices(character.sprite)))
                continue
            monster_batches.setdefault(character.sprite.texture, []).extend(
                _sprite_vertices(character.sprite)
            )
            if alive:
                hp_bars.extend(_hp_bar_vertices(character))
        flush()
        if hp_bars:
            calls.append(DrawCall(None, hp_bars))
        return calls

    def set_flames(self, flames: Iterable[Flame]) -> list[Vertex]:
        """Replace the pending flame triangles with those of the given flames."""
        self.flame_vertices = flame_triangles(flames)
        return self.flame_vertices