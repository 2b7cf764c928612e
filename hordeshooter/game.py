"""The game world: players, monsters and effects, updated and drawn once per frame."""

from __future__ import annotations

import argparse
import random
from typing import Protocol

import pygame

from .aoe import AoE, update_aoe
from .blood import Blood, Footprint, GroundBlood, update_blood
from .geometry import Color, FloatRect, Vector2
from .monster import Monster
from .monsters import MonsterFactory, Zombie
from .player import InputState, Player
from .renderer import BatchRenderer, DrawCall, Vertex, quad_vertices, rectangle_vertices
from .tilemap import TileMap

WINDOW_SIZE = (1200, 720)
WINDOW_TITLE = "Horde Shooter"
FRAME_RATE = 60
PLAYER_START = Vector2(700, 600)
DEFAULT_MONSTER_COUNT = 5
LINEUP_COUNT = 5
LINEUP_SPACING = 200.0
LINEUP_Y = 400.0
HITBOX_THICKNESS = 1.0
TILESHEET_TEXTURE = "tilesheet"


class Projectile(Protocol):
    """A projectile as the world updates it."""

    def update(self, world: GameState, delta_time: float) -> bool:
        """Move the projectile; return True once it should be removed."""
        ...

    def global_bounds(self) -> FloatRect: ...


class GameState:
    """Everything in play and the order in which it is updated."""

    def __init__(
        self,
        rng: random.Random | None = None,
        tile_map=None,
        monster_count: int = DEFAULT_MONSTER_COUNT,
    ) -> None:
        self.rng = rng or random.Random()
        self.tile_map = tile_map if tile_map is not None else TileMap(TILESHEET_TEXTURE)
        self.tile_map.load()
        self.batch_renderer = BatchRenderer()
        self.players: list[Player] = [Player(PLAYER_START)]
        self.monsters: list[Monster] = []
        self.projectiles: list = []
        self.blood_spray: list[Blood] = []
        self.ground_blood: list[GroundBlood] = []
        self.footprints: list[Footprint] = []
        self.aoe: list[AoE] = []
        self.flames: list = []
        self.show_monster_hitboxes = False
        self.show_player_hitboxes = False
        self.spawn_random_monsters(monster_count)

    def spawn_random_monsters(self, count: int) -> None:
        """Replace the monsters with count new ones around the screen."""
        self.monsters = MonsterFactory(self.rng).spawn(count)

    def collateral_lineup(self) -> None:
        """Add a row of motionless zombies for testing piercing shots."""
        for index in range(LINEUP_COUNT):
            zombie = Zombie(Vector2(LINEUP_SPACING * index, LINEUP_Y))
            zombie.disabled_movement = True
            self.monsters.append(zombie)

    def update(self, inputs: InputState, delta_time: float) -> None:
        """Advance the whole world by one frame."""
        self.tile_map.update(delta_time)
        self.projectiles[:] = [p for p in self.projectiles if not p.update(self, delta_time)]
        update_blood(self.blood_spray, self.ground_blood, delta_time)
        update_aoe(self.aoe, self.monsters, delta_time)
        for player in self.players:
            player.update(self, inputs, delta_time)
        self.monsters[:] = [m for m in self.monsters if not m.update(self, delta_time)]

    def characters(self) -> list:
        """Monsters followed by players."""
        return [*self.monsters, *self.players]

    def _frame_calls(self) -> list[DrawCall]:
        calls: list[DrawCall] = []

        decals = [*self.footprints, *self.ground_blood, *self.blood_spray]
        if decals:
            vertices: list[Vertex] = []
            for decal in decals:
                corners = decal.cached_corners or decal.corners()
                vertices.extend(quad_vertices(corners, decal.anim.texture_frame, decal.colour))
            calls.append(DrawCall(decals[0].anim.texture, vertices))

        calls.extend(self.batch_renderer.batch_characters(self.characters()))

        if self.projectiles:
            vertices = []
            for projectile in self.projectiles:
                vertices.extend(rectangle_vertices(projectile.global_bounds(), Color.YELLOW))
            calls.append(DrawCall(None, vertices))

        calls.extend(_sprite_calls(effect.sprite for effect in self.aoe))

        status_sprites = []
        for monster in self.monsters:
            if monster.is_dead():
                continue
            if monster.on_fire.is_active():
                status_sprites.append(monster.on_fire.sprite)
            if monster.paralyzed.is_active():
                status_sprites.append(monster.paralyzed.sprite)
        calls.extend(_sprite_calls(status_sprites))

        self.batch_renderer.set_flames(self.flames)
        if self.batch_renderer.flame_vertices:
            calls.append(DrawCall(None, self.batch_renderer.flame_vertices, additive=True))
            self.batch_renderer.flame_vertices = []

        outlines: list[Vertex] = []
        if self.show_monster_hitboxes:
            for monster in self.monsters:
                outlines.extend(_outline(monster.sprite.global_bounds(), Color.RED))
                outlines.extend(_outline(monster.hitbox, Color.YELLOW))
        if self.show_player_hitboxes:
            for player in self.players:
                outlines.extend(_outline(player.global_bounds(), Color.RED))
                outlines.extend(_outline(player.foot_collider(), Color.GREEN))
        if outlines:
            calls.append(DrawCall(None, outlines))
        return calls


def _sprite_calls(sprites) -> list[DrawCall]:
    batches: dict[str, list[Vertex]] = {}
    for sprite in sprites:
        batches.setdefault(sprite.texture, []).extend(
            quad_vertices(sprite.corners(), sprite.texture_rect, sprite.color)
        )
    return [DrawCall(texture, vertices) for texture, vertices in batches.items()]


def _outline(rect: FloatRect, colour: Color) -> list[Vertex]:
    x, y = rect.position.x, rect.position.y
    w, h = rect.size.x, rect.size.y
    t = HITBOX_THICKNESS
    edges = (
        FloatRect(Vector2(x, y), Vector2(w, t)),
        FloatRect(Vector2(x, y + h - t), Vector2(w, t)),
        FloatRect(Vector2(x, y), Vector2(t, h)),
        FloatRect(Vector2(x + w - t, y), Vector2(t, h)),
    )
    return [vertex for edge in edges for vertex in rectangle_vertices(edge, colour)]


def _present(surface: pygame.Surface, calls: list[DrawCall]) -> None:
    surface.fill((0, 0, 0))
    for call in calls:
        target = surface
        if call.additive:
            target = pygame.Surface(surface.get_size())
            target.fill((0, 0, 0))
        points = iter(call.vertices)
        for triangle in zip(points, points, points):
            colour = triangle[0].colour
            pygame.draw.polygon(
                target,
                (colour.r, colour.g, colour.b),
                [(v.position.x, v.position.y) for v in triangle],
            )
        if call.additive:
            surface.blit(target, (0, 0), special_flags=pygame.BLEND_RGB_ADD)


def main(argv=None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="hordeshooter")
    parser.add_argument("--monsters", type=int, default=DEFAULT_MONSTER_COUNT)
    parser.add_argument("--lineup", action="store_true", help="add a row of motionless zombies")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        game = GameState(rng=random.Random(args.seed), monster_count=args.monsters)
        if args.lineup:
            game.collateral_lineup()
        held: set[str] = set()
        running = True
        while running:
            delta_time = clock.tick(FRAME_RATE) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    held.add(pygame.key.name(event.key))
                elif event.type == pygame.KEYUP:
                    held.discard(pygame.key.name(event.key))
            if not running:
                break
            mouse_x, mouse_y = pygame.mouse.get_pos()
            inputs = InputState(
                keys=frozenset(held),
                mouse_position=Vector2(float(mouse_x), float(mouse_y)),
                mouse_left=bool(pygame.mouse.get_pressed()[0]),
            )
            game.update(inputs, delta_time)
            _present(screen, game._frame_calls())
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())