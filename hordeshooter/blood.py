"""Blood sprays, ground blood pools and the footprints left by walking through them."""

from __future__ import annotations

import math
import random
from dataclasses import replace

from .character import AnimData
from .geometry import Color, FloatRect, RectangleShape, Transformable, Vector2

PI = 3.141592
ON_HIT_SPRAY_ROTATION_OFFSET = PI / 4.0
ON_HIT_SPRAY_POSITION_OFFSET = 50.0
ON_HIT_GROUND_POSITION_OFFSET = 10.0
SPRAY_FIRST_FRAME_X = 32
GROUND_FRAMES_PER_ROW = 6
GROUND_FRAME_WIDTH = 210
GROUND_FRAME_HEIGHT = 250
GROUND_FIRST_ROW_Y = 850
GROUND_COLLIDER_RADIUS = 10.0

FOOTPRINT_OFFSET_PIXELS = 8.0
FOOT_COLLIDER_X_OFFSET = 12.0
FOOTPRINT_DECAY_TIME = 3.0
FOOTPRINT_DT_RATE = 0.25

BLOOD_TEXTURE = "blood"

SPRAY_ANIMATIONS: tuple[AnimData, ...] = tuple(
    AnimData(
        BLOOD_TEXTURE,
        FloatRect(Vector2(SPRAY_FIRST_FRAME_X, row * 128), Vector2(100, 100)),
        total_frames=9,
        anim_speed=0.02,
        frame_spacing=128,
    )
    for row in range(6)
)
GROUND_ANIMATION = AnimData(
    BLOOD_TEXTURE,
    FloatRect(Vector2(0, GROUND_FIRST_ROW_Y), Vector2(GROUND_FRAME_WIDTH, GROUND_FRAME_HEIGHT)),
    total_frames=12,
    anim_speed=0.03,
)
LEFT_FOOTPRINT = AnimData(BLOOD_TEXTURE, FloatRect(Vector2(0, 1400), Vector2(32, 48)))
RIGHT_FOOTPRINT = AnimData(BLOOD_TEXTURE, FloatRect(Vector2(32, 1400), Vector2(32, 48)))


class Blood(Transformable):
    """A blood decal showing one frame of its animation."""

    def __init__(self, anim: AnimData, position: Vector2) -> None:
        frame = anim.texture_frame
        super().__init__(
            position=position,
            origin=Vector2(frame.size.x / 2.0, frame.size.y / 2.0),
            scale=Vector2(0.9, 0.9),
        )
        self.anim = anim.copy()
        self.colour = Color.WHITE
        self.cached_corners: tuple[Vector2, Vector2, Vector2, Vector2] | None = None

    def local_bounds(self) -> FloatRect:
        size = self.anim.texture_frame.size
        return FloatRect(Vector2(), Vector2(abs(size.x), abs(size.y)))

    def update_spray_anim(self, delta_time: float) -> bool:
        """Advance the spray animation; return True once it has played through."""
        anim = self.anim
        if anim.delta_time_sum >= anim.anim_speed:
            x = SPRAY_FIRST_FRAME_X + (anim.curr_frame % anim.total_frames) * anim.frame_spacing
            frame = anim.texture_frame
            anim.texture_frame = FloatRect(Vector2(x, frame.position.y), frame.size)
            anim.curr_frame += 1
            if anim.curr_frame >= anim.total_frames:
                anim.curr_frame = 0
                return True
            anim.delta_time_sum = 0.0
        anim.delta_time_sum += delta_time
        return False

    def set_rotation(self, incoming_position: Vector2) -> None:
        """Turn the spray away from where the hit came from and push it through the target."""
        difference = self.position - incoming_position
        self.rotation = math.atan2(difference.y, difference.x) + ON_HIT_SPRAY_ROTATION_OFFSET
        self.move(difference.normalized() * ON_HIT_SPRAY_POSITION_OFFSET)

    def cache_corners(self) -> tuple[Vector2, Vector2, Vector2, Vector2]:
        """Store the transformed corners; the decal never moves afterwards."""
        self.cached_corners = self.corners()
        return self.cached_corners


class _Collider(Transformable):
    """A circle of the given radius, bounded by its enclosing square."""

    def __init__(self, radius: float, **kwargs) -> None:
        super().__init__(**kwargs)
        self.radius = radius
        self.origin = Vector2(radius, radius)

    def local_bounds(self) -> FloatRect:
        return FloatRect(Vector2(), Vector2(2 * self.radius, 2 * self.radius))


class GroundBlood(Blood):
    """A pool of blood on the ground with an oval collider for footprints."""

    def __init__(self, anim: AnimData, position: Vector2, rng: random.Random | None = None) -> None:
        super().__init__(anim, position)
        self._rng = rng or random.Random()
        self.collider = _Collider(
            GROUND_COLLIDER_RADIUS, position=self.position, scale=Vector2(2.0, 1.0)
        )
        self.scale = Vector2(0.65, 0.65)

    def update_ground_anim(self, delta_time: float) -> None:
        """Advance the pool animation, whose frames span several texture rows."""
        anim = self.anim
        if anim.curr_frame == -1:
            return
        anim.delta_time_sum += delta_time
        if anim.delta_time_sum >= anim.anim_speed:
            x = (anim.curr_frame % GROUND_FRAMES_PER_ROW) * GROUND_FRAME_WIDTH
            y = GROUND_FIRST_ROW_Y + (anim.curr_frame // GROUND_FRAMES_PER_ROW) * GROUND_FRAME_HEIGHT
            anim.texture_frame = replace(anim.texture_frame, position=Vector2(x, y))
            anim.curr_frame += 1
            if anim.curr_frame >= anim.total_frames:
                anim.curr_frame = -1
            anim.delta_time_sum = 0.0

    def set_rotation(self, incoming_position: Vector2) -> None:
        """Turn and shift the pool and its collider away from the hit."""
        difference = self.position - incoming_position
        angle = math.atan2(difference.y, difference.x) + self._rng.uniform(0.0, 60.0)
        offset = difference.normalized() * ON_HIT_GROUND_POSITION_OFFSET
        self.rotation = angle
        self.move(offset)
        self.collider.rotation = angle
        self.collider.move(offset)


def has_ground_blood_collision(bounds: FloatRect, ground_blood: list[GroundBlood]) -> bool:
    """True if the bounds touch the collider of any ground blood."""
    return any(blood.collider.global_bounds().intersects(bounds) for blood in ground_blood)


def bounding_box(vertices) -> RectangleShape:
    """Axis-aligned outline around the given points."""
    points = list(vertices)
    if not points:
        raise ValueError("bounding_box needs at least one vertex")
    min_x = min(p.x for p in points)
    min_y = min(p.y for p in points)
    max_x = max(p.x for p in points)
    max_y = max(p.y for p in points)
    return RectangleShape(
        size=Vector2(max_x - min_x, max_y - min_y),
        fill_color=Color.TRANSPARENT,
        position=Vector2(min_x, min_y),
    )


def next_spray_anim(rng: random.Random) -> AnimData:
    """A randomly chosen spray animation, ready to play."""
    return SPRAY_ANIMATIONS[rng.randint(0, len(SPRAY_ANIMATIONS) - 1)].copy()


def create_projectile_blood(
    projectile_position: Vector2,
    source_position: Vector2,
    hitbox: FloatRect,
    spray: list[Blood],
    ground: list[GroundBlood],
    horizontal_hitbox: bool,
    rng: random.Random,
) -> None:
    """Add a spray and a ground pool for a projectile hitting the hitbox."""
    center = hitbox.center()
    if horizontal_hitbox:
        origin = Vector2(projectile_position.x, center.y)
    else:
        origin = Vector2(center.x, projectile_position.y)
    new_spray = Blood(next_spray_anim(rng), origin)
    new_spray.set_rotation(source_position)
    new_spray.cache_corners()
    spray.append(new_spray)

    pool_position = Vector2(center.x, center.y + hitbox.size.y * 0.3)
    new_ground = GroundBlood(GROUND_ANIMATION, pool_position, rng)
    new_ground.set_rotation(source_position)
    new_ground.cache_corners()
    ground.append(new_ground)


def update_blood(spray: list[Blood], ground: list[GroundBlood], delta_time: float) -> None:
    """Advance all blood animations, dropping sprays that have finished."""
    spray[:] = [blood for blood in spray if not blood.update_spray_anim(delta_time)]
    for blood in ground:
        blood.update_ground_anim(delta_time)


class Footprint(Blood):
    """A bloody footprint that fades with the time since the last step in blood."""

    def __init__(
        self,
        anim: AnimData,
        bounds: FloatRect,
        direction: Vector2,
        create_left_foot: bool,
        decay_timer: float,
        decay_time: float = FOOTPRINT_DECAY_TIME,
    ) -> None:
        super().__init__(anim, bounds.position)
        self.create_left_foot = create_left_foot
        self.scale = Vector2(0.45, 0.45)
        self.move(Vector2(bounds.size.x / 2, bounds.size.y))
        self.rotation = direction.angle()
        self.rotate(math.pi / 2)
        if create_left_foot:
            perpendicular = Vector2(direction.y, -direction.x)
        else:
            perpendicular = Vector2(-direction.y, direction.x)
        self.move(perpendicular * FOOTPRINT_OFFSET_PIXELS)
        decay_ratio = (decay_time - decay_timer) / decay_time
        alpha = int(min(255.0, max(0.0, (1 - decay_ratio) * 255)))
        self.colour = replace(self.colour, a=alpha)
        self.cache_corners()


class FootprintManager:
    """Leaves alternating footprints behind a character that walked through blood."""

    def __init__(
        self,
        decay_time: float = FOOTPRINT_DECAY_TIME,
        dt_rate: float = FOOTPRINT_DT_RATE,
    ) -> None:
        self.decay_time = decay_time
        self.dt_rate = dt_rate
        self.create_left_foot_next = True
        self.decay_timer = 0.0
        self.dt_sum = 0.0

    def foot_collider(self, bounds: FloatRect) -> FloatRect:
        """The area around the feet at the bottom of the character's bounds."""
        return FloatRect(
            Vector2(bounds.position.x + FOOT_COLLIDER_X_OFFSET, bounds.position.y + bounds.size.y * 0.8),
            Vector2(bounds.size.x - FOOT_COLLIDER_X_OFFSET * 2, bounds.size.y * 0.2),
        )

    def update(
        self,
        bounds: FloatRect,
        direction: Vector2,
        ground_blood: list[GroundBlood],
        footprints: list[Footprint],
        delta_time: float,
    ) -> None:
        """Add a footprint if the feet are bloody and a step is due."""
        collision = has_ground_blood_collision(self.foot_collider(bounds), ground_blood)
        if (collision or self.decay_timer > 0.01) and self.dt_sum >= self.dt_rate:
            left = self.create_left_foot_next
            anim = LEFT_FOOTPRINT if left else RIGHT_FOOTPRINT
            self.create_left_foot_next = not left
            if collision:
                self.decay_timer = self.decay_time
            footprints.append(
                Footprint(anim, bounds, direction, left, self.decay_timer, decay_time=self.decay_time)
            )
            self.dt_sum = 0.0
        self.dt_sum += delta_time
        if self.decay_timer > 0:
            self.decay_timer -= delta_time