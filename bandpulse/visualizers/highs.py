"""Highs: twinkling star field, constellation lines and a shimmer wave."""

import math
import random

from bandpulse.frequency_bands import Category, group_for
from bandpulse.visualizers.common import (
    WHITE,
    DrawCommand,
    Panel,
    ParticleEmitter,
    circle,
    line,
    rgba,
)

STAR_COUNT = 20
CONNECT_DISTANCE = 80.0
MAX_SPARKLES = 100


class Star:
    __slots__ = ("x", "y", "size", "twinkle", "twinkle_speed", "brightness")

    def __init__(self, rng):
        self.x = rng.random()
        self.y = rng.random()
        self.size = 1 + rng.random() * 3
        self.twinkle = rng.random() * math.tau
        self.twinkle_speed = 0.05 + rng.random() * 0.1
        self.brightness = 0.0


class HighsVisualizer:
    def __init__(self, rng=None, pool=None):
        group = group_for(Category.HIGHS)
        self.rng = rng or random.Random()
        self.panel = Panel(group.name, group.primary_color, group.accent_color)
        self.particles = ParticleEmitter(pool, max_particles=MAX_SPARKLES, rng=self.rng)

        # positions are fractions of the panel so resizing keeps the field
        self.stars = [Star(self.rng) for _ in range(STAR_COUNT)]
        self.shimmer_phase = 0.0

    def set_bounds(self, x, y, width, height):
        self.panel.set_bounds(x, y, width, height)

    def toggle(self):
        return self.panel.toggle()

    def update(self, energy, peak=None, dt=1.0):
        if not self.panel.enabled:
            return

        self.panel.track(energy)
        self.particles.update(dt)

        self.shimmer_phase += 0.1 + energy * 0.2

        for star in self.stars:
            star.twinkle += star.twinkle_speed * (1 + energy * 2)
            star.brightness = (math.sin(star.twinkle) * 0.5 + 0.5) * (0.3 + energy * 0.7)

        if peak is not None and peak.is_peak and energy > 0.4:
            self._sparkle(energy)

    def _sparkle(self, energy):
        panel = self.panel
        for _ in range(int(energy * 10)):
            if not self.particles.spawn(
                panel.x + self.rng.random() * panel.width,
                panel.y + self.rng.random() * panel.height,
                (self.rng.random() - 0.5) * 2,
                (self.rng.random() - 0.5) * 2,
                0.5 + self.rng.random() * 0.5,
                2 + self.rng.random() * 4,
                (255, 255, 255, 255),
            ):
                break

    # -----------------------------------------------------

    def _star_position(self, star):
        panel = self.panel
        return panel.x + star.x * panel.width, panel.y + star.y * panel.height

    def draw(self):
        if not self.panel.enabled:
            return []

        panel = self.panel
        primary = panel.color
        accent = panel.accent_color
        commands = [panel.background()]

        positions = [self._star_position(s) for s in self.stars]

        if panel.energy > 0.1:
            for i in range(len(self.stars)):
                x1, y1 = positions[i]
                for j in range(i + 1, len(self.stars)):
                    x2, y2 = positions[j]
                    dist = math.hypot(x2 - x1, y2 - y1)
                    if dist < CONNECT_DISTANCE:
                        alpha = (1 - dist / CONNECT_DISTANCE) * panel.energy * 100
                        commands.append(line(x1, y1, x2, y2, rgba(accent, alpha), 1))

        for star, (x, y) in zip(self.stars, positions):
            size = star.size * (1 + star.brightness)
            commands.append(circle(x, y, size * 3 / 2, rgba(primary, star.brightness * 50)))
            commands.append(circle(x, y, size / 2, rgba(WHITE, star.brightness * 255)))

        cy = panel.y + panel.height * 0.8
        shimmer = []
        steps = 50
        for i in range(steps + 1):
            x = panel.x + i / steps * panel.width
            y = cy + math.sin(self.shimmer_phase + i * 0.3) * panel.energy * 15
            shimmer.append((x, y))
        commands.append(DrawCommand("polyline", tuple(shimmer), 0.0, rgba(accent, 100), 2))

        commands.extend(self.particles.draw())
        commands.extend(panel.label())
        return commands

    def cleanup(self):
        self.particles.prune()

    def dispose(self):
        self.particles.dispose()
        self.shimmer_phase = 0.0
