# hordeshooter

The game logic of a top-down arcade shooter. A player stands in a walled
arena beside an animated lava fall while monsters (zombies, small and big
demons, wolves) spawn beyond the edges of the screen and close in. Monsters
take damage from projectiles, leave blood sprays and ground pools behind, and
the player leaves fading footprints after walking through blood. Monsters can
be set on fire, paralyzed, slowed, shrunk and knocked back.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
hordeshooter [--monsters N] [--lineup] [--seed SEED]
```

This opens a 1200×720 pygame window running at up to 60 frames per second.
Close the window to quit.

- `--monsters N`: how many monsters to spawn at the start (default 5)
- `--lineup`: also add a row of five motionless zombies
- `--seed SEED`: seed the random number generator for repeatable spawns

Controls:

- **W A S D**: move, within the bounds of the screen
- **Mouse**: the player faces the mouse pointer

By default the `MonsterFactory` that `GameState` uses spawns wolves only;
pass `monster_types=(1, 4)` to `MonsterFactory` for a mix of all four kinds.

## Using it as a library

The game logic has no dependency on a display; only `hordeshooter.game.main`
uses pygame.

- `hordeshooter.geometry`: `Vector2`, `Color`, `FloatRect`, `Transformable`,
  `RectangleShape` and `Vertex`
- `hordeshooter.character`: `Character`, `Sprite`, `AnimData` and
  `advance_animation`
- `hordeshooter.hud`: `Hud`, the segmented health bar over each character
- `hordeshooter.tilemap`: `TileMap` and `texture_coordinates` for the arena
  and its animated lava
- `hordeshooter.blood`: `Blood`, `GroundBlood`, `Footprint`,
  `FootprintManager`, `create_projectile_blood`, `update_blood` and
  `has_ground_blood_collision`
- `hordeshooter.damage_numbers`: `DamageNumber`, `DamageNumberManager` and
  `NumberType`
- `hordeshooter.particles`: `MuzzleFlash`, `Shell` and `shell_velocity`
- `hordeshooter.effects`: `StatusEffect`, `OnFire`, `Paralyzed`, `Slowed`,
  `Shrink` and `Knockback`
- `hordeshooter.attacks`: `MonsterState`, `Attack` and `MeleeAttack`
- `hordeshooter.aoe`: `AoE`, `Explosion`, `ExplosionData` and `update_aoe`
- `hordeshooter.monster`, `hordeshooter.monsters`, `hordeshooter.wolf`: the
  `Monster` base, `Zombie`, `SmallDemon`, `BigDemon`, `Wolf`, `WolfAttack`
  and the `MonsterFactory` that spawns monsters off screen
- `hordeshooter.player`: `Player`, `PlayerState` and `InputState`
- `hordeshooter.renderer`: `BatchRenderer` and the vertex helpers
  `quad_vertices`, `rectangle_vertices`, `flame_triangles` and `draw_order`
- `hordeshooter.game`: `GameState`, which holds the whole world and steps it
  with `update(inputs, delta_time)`, and `main`

For example, this steps a world by one frame with no keys pressed:

```python
from hordeshooter.game import GameState
from hordeshooter.player import InputState

world = GameState()
world.update(InputState(), 1 / 60)
print(len(world.characters()))  # five monsters and one player
```

## What it does not do

- There are no weapons or projectiles. `Player` accepts a `weapons` mapping of
  key names to weapon factories and a `weapon`, and `GameState` updates any
  objects placed in `projectiles`, but the package defines none, so the player
  cannot shoot in the window and space does nothing.
- There are no textures, images or fonts. Textures are names only, and the
  window draws every triangle as a flat-coloured polygon, so characters, blood
  and the tile map appear as coloured shapes. Damage numbers are tracked but
  not drawn.
- There is no sound, menu, score or game-over screen.