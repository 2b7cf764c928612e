"""The arena tile map with its animated lava tiles."""

from __future__ import annotations

from .geometry import Vertex, Vector2

TEXTURE_MAPPING: dict[int, tuple[float, float]] = {
    -1: (1, 4), 0: (1, 0.0), 1: (2, 0.0), 2: (3, 0.0), 3: (1, 1),
    7: (3.67, 8.5), 8: (1.32, 7.5), 9: (3.67, 7.5), 10: (0, 9.5), 11: (1.32, 8.5),
    12: (5, 0), 16: (0.97, 10.25), 17: (6.84, 16.75), 18: (0, 10.25), 19: (0, 11.25),
    20: (1, 0.75), 21: (2, 0.75), 22: (3, 0.75), 23: (2.5, 9.25),
    101: (5, 1), 102: (4, 1), 103: (6, 1), 104: (5, 2), 105: (4, 2), 106: (6, 2),
}

COLUMNS = 25
ROWS = 15

_FLOOR_ROW = (10,) + (-1,) * 23 + (7,)

LEVEL: tuple[tuple[int, ...], ...] = (
    (8, 0, 1, 2, 0, 1, 2, 0, 1, 2, 0, 1, 12, 0, 1, 2, 0, 1, 2, 0, 1, 2, 0, 1, 9),
    (11,) + (3,) * 11 + (101,) + (3,) * 11 + (7,),
    (10,) + (-1,) * 11 + (104,) + (-1,) * 11 + (7,),
    *((_FLOOR_ROW,) * 10),
    (18,) + (20, 21, 22) * 8 + (16,),
    (19,) + (23,) * 23 + (17,),
)

LAVA_COLUMN = 12
LAVA_FRAMES: tuple[tuple[int, int], ...] = ((101, 104), (102, 105), (103, 106))


def texture_coordinates(tile_id: int, tile_width: int, tile_height: int) -> list[Vector2]:
    """Texture coordinates of the two triangles of a tile."""
    try:
        x, y = TEXTURE_MAPPING[tile_id]
    except KeyError:
        raise ValueError(f"No texture mapping for tile id {tile_id}") from None
    top_left = Vector2(x * tile_width, y * tile_height)
    top_right = Vector2((x + 1) * tile_width, y * tile_height)
    bottom_left = Vector2(x * tile_width, (y + 1) * tile_height)
    bottom_right = Vector2((x + 1) * tile_width, (y + 1) * tile_height)
    return [top_left, top_right, bottom_left, bottom_left, bottom_right, top_right]


class TileMap:
    """A grid of textured tiles stored as a flat triangle list."""

    def __init__(
        self,
        texture: str,
        tile_width: int = 16,
        tile_height: int = 16,
        scale_factor: float = 3.0,
        anim_speed: float = 0.1,
    ) -> None:
        self.texture = texture
        self.tile_width = tile_width
        self.tile_height = tile_height
        self.scale_factor = scale_factor
        self.anim_speed = anim_speed
        self.lava_frame = 0
        self.delta_time_sum = 0.0
        self.vertices: list[Vertex] = []

    def _set_texture(self, tile_id: int, column: int, row: int) -> None:
        coords = texture_coordinates(tile_id, self.tile_width, self.tile_height)
        for vertex, coord in zip(self.tile_triangles(column, row), coords):
            vertex.tex_coords = coord

    def load(self) -> None:
        """Build the triangles for every tile of the level."""
        self.vertices = [Vertex() for _ in range((COLUMNS + 1) * ROWS * 6)]
        width = int(self.tile_width * self.scale_factor)
        height = int(self.tile_height * self.scale_factor)
        for row, tiles in enumerate(LEVEL):
            for column, tile_id in enumerate(tiles):
                left, top = column * width, row * height
                right, bottom = left + width, top + height
                corners = (
                    Vector2(left, top),
                    Vector2(right, top),
                    Vector2(left, bottom),
                    Vector2(left, bottom),
                    Vector2(right, bottom),
                    Vector2(right, top),
                )
                for vertex, corner in zip(self.tile_triangles(column, row), corners):
                    vertex.position = corner
                self._set_texture(tile_id, column, row)
        self.delta_time_sum = 0.0

    def update(self, delta_time: float) -> None:
        """Advance the lava animation once enough time has passed."""
        self.delta_time_sum += delta_time
        if self.delta_time_sum < self.anim_speed:
            return
        middle_id, bottom_id = LAVA_FRAMES[self.lava_frame]
        self._set_texture(middle_id, LAVA_COLUMN, 1)
        self._set_texture(bottom_id, LAVA_COLUMN, 2)
        self.lava_frame = (self.lava_frame + 1) % len(LAVA_FRAMES)
        self.delta_time_sum = 0.0

    def tile_triangles(self, column: int, row: int) -> list[Vertex]:
        """The six vertices of one tile."""
        if not (0 <= column < COLUMNS and 0 <= row < ROWS):
            raise IndexError(f"tile ({column}, {row}) is outside the map")
        start = (column + row * COLUMNS) * 6
        return self.vertices[start:start + 6]