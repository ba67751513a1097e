"""Pieces shared by the visualizers.

A visualizer consumes one category's energy and peak state and produces a
list of ``DrawCommand`` records; it never draws directly, so the same
visualizer can be rendered by OpenCV or inspected in tests. Visualizers are
built by composition: ``Panel`` owns bounds, the enabled flag, the eased
energy and the label, ``ParticleEmitter`` owns pooled particles.

Time steps (``dt``) are in 60 fps frames: 1.0 is one frame at 60 Hz.
"""

import math
import random
from dataclasses import dataclass
from typing import Protocol

from bandpulse.frequency_bands import Category
from bandpulse.object_pool import particle_pool

BACKGROUND = (20, 20, 25, 150)
WHITE = (255, 255, 255)


@dataclass(frozen=True)
class DrawCommand:
    shape: str  # circle | line | polyline | polygon | rect | text
    points: tuple
    size: float = 0.0
    color: tuple = (255, 255, 255, 255)
    thickness: int = -1  # -1 fills
    text: str = None


def circle(x, y, radius, color, thickness=-1):
    return DrawCommand("circle", ((x, y),), max(0.0, radius), rgba(color), thickness)


def line(x1, y1, x2, y2, color, thickness=1):
    return DrawCommand("line", ((x1, y1), (x2, y2)), 0.0, rgba(color), thickness)


def rgba(color, alpha=None):
    """Colour as an ``(r, g, b, a)`` tuple of ints, alpha clamped to 0..255."""
    r, g, b = color[:3]
    if alpha is None:
        alpha = color[3] if len(color) > 3 else 255
    return (int(r), int(g), int(b), int(max(0, min(255, alpha))))


def lerp_color(c1, c2, t):
    return tuple(a + (b - a) * t for a, b in zip(c1[:3], c2[:3]))


class Visualizer(Protocol):
    panel: "Panel"

    def set_bounds(self, x, y, width, height): ...

    def update(self, energy, peak=None, dt=1.0): ...

    def draw(self) -> list: ...

    def toggle(self) -> bool: ...

    def cleanup(self): ...

    def dispose(self): ...


class Panel:
    def __init__(self, name, color, accent_color, smoothing=0.2):
        self.name = name
        self.color = color
        self.accent_color = accent_color
        self.smoothing = smoothing
        self.enabled = True

        self.x = 0.0
        self.y = 0.0
        self.width = 100.0
        self.height = 100.0

        self.energy = 0.0
        self.smoothed_energy = 0.0

    def set_bounds(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    def track(self, energy):
        self.energy = energy
        self.smoothed_energy += (energy - self.smoothed_energy) * self.smoothing

    def toggle(self):
        self.enabled = not self.enabled
        return self.enabled

    def background(self):
        return DrawCommand(
            "rect",
            ((self.x, self.y), (self.x + self.width, self.y + self.height)),
            color=BACKGROUND,
        )

    def label(self):
        return [
            DrawCommand("text", ((self.x + 10, self.y + 20),), 0.45, (255, 255, 255, 150), 1, self.name),
            DrawCommand(
                "text",
                ((self.x + 10, self.y + 38),),
                0.45,
                rgba(self.color, 200),
                1,
                f"{round(self.smoothed_energy * 100)}%",
            ),
        ]


class ParticleEmitter:
    def __init__(self, pool=None, max_particles=50, rng=None):
        self.pool = pool if pool is not None else particle_pool
        self.max_particles = max_particles
        self.rng = rng or random.Random()
        self.active = []

    def spawn(self, x, y, vx, vy, life, size, color):
        if len(self.active) >= self.max_particles:
            return False
        particle = self.pool.acquire()
        particle.init(x, y, vx, vy, life, size, color)
        self.active.append(particle)
        return True

    def burst(self, panel, energy, color):
        """Radial burst from the panel centre, ``energy * 5`` particles."""
        cx, cy = panel.center
        for _ in range(int(energy * 5)):
            angle = self.rng.random() * math.tau
            speed = 1 + self.rng.random() * 3
            if not self.spawn(
                cx, cy,
                math.cos(angle) * speed,
                math.sin(angle) * speed,
                1 + self.rng.random(),
                3 + self.rng.random() * 5,
                rgba(color, 200),
            ):
                break

    def update(self, dt=1.0):
        for i in range(len(self.active) - 1, -1, -1):
            particle = self.active[i]
            if not particle.update(dt):
                self.pool.release(particle)
                del self.active[i]

    def prune(self):
        """Drop particles that died without an update (cleanup hook)."""
        alive = []
        for particle in self.active:
            if particle.active:
                alive.append(particle)
            else:
                self.pool.release(particle)
        self.active = alive

    def draw(self):
        commands = []
        for particle in self.active:
            if not particle.active:
                continue
            fade = particle.fade
            commands.append(circle(
                particle.x,
                particle.y,
                particle.size * fade / 2,
                rgba(particle.color, particle.color[3] * fade),
            ))
        return commands

    def dispose(self):
        self.pool.release_all(self.active)
        self.active = []


def layout_grid(width, height, padding=20):
    """Bounds of the four panels in a 2×2 grid: drums, vocals / bass, highs."""
    half_w = (width - padding * 3) / 2
    half_h = (height - padding * 3) / 2
    left = padding
    right = padding * 2 + half_w
    top = padding
    bottom = padding * 2 + half_h
    return {
        Category.DRUMS: (left, top, half_w, half_h),
        Category.VOCALS: (right, top, half_w, half_h),
        Category.BASS: (left, bottom, half_w, half_h),
        Category.HIGHS: (right, bottom, half_w, half_h),
    }
