"""Bass: breathing concentric rings, radial bars and a deformed centre mass."""

import math
import random

from bandpulse.frequency_bands import Category, group_for
from bandpulse.visualizers.common import (
    DrawCommand,
    Panel,
    ParticleEmitter,
    circle,
    line,
    rgba,
)

RING_COUNT = 5
BAR_COUNT = 16
MASS_SEGMENTS = 32
FRAME_MS = 1000.0 / 60.0


class BassVisualizer:
    def __init__(self, rng=None, pool=None):
        group = group_for(Category.BASS)
        self.rng = rng or random.Random()
        self.panel = Panel(group.name, group.primary_color, group.accent_color)
        self.particles = ParticleEmitter(pool, max_particles=50, rng=self.rng)

        self.rings = [
            {"radius": 0.0, "phase": i * math.pi * 2 / RING_COUNT}
            for i in range(RING_COUNT)
        ]
        self.bars = [
            {
                "angle": i / BAR_COUNT * math.tau,
                "height": 0.0,
                "target_height": 0.0,
            }
            for i in range(BAR_COUNT)
        ]
        self.scale = 1.0
        self.elapsed_ms = 0.0

    def set_bounds(self, x, y, width, height):
        self.panel.set_bounds(x, y, width, height)

    def toggle(self):
        return self.panel.toggle()

    @property
    def rumble_offset(self):
        return math.sin(self.elapsed_ms * 0.01) * self.panel.energy * 3

    def update(self, energy, peak=None, dt=1.0):
        if not self.panel.enabled:
            return

        self.panel.track(energy)
        self.particles.update(dt)
        if peak is not None and peak.is_peak:
            self.particles.burst(self.panel, energy, self.panel.color)

        self.elapsed_ms += dt * FRAME_MS

        target_scale = 1 + energy * 0.5
        self.scale += (target_scale - self.scale) * 0.2

        base_radius = min(self.panel.width, self.panel.height) * 0.15
        for i, ring in enumerate(self.rings):
            ring["phase"] += 0.02 + energy * 0.05
            breath = math.sin(ring["phase"]) * 0.1 + 1
            ring["radius"] = base_radius * (i + 1) * 0.5 * self.scale * breath

        for bar in self.bars:
            bar["target_height"] = energy * self.panel.height * 0.25 * (0.5 + self.rng.random() * 0.5)
            bar["height"] += (bar["target_height"] - bar["height"]) * 0.15

    # -----------------------------------------------------

    def _mass(self, cx, cy):
        base = 40 * self.scale
        energy = self.panel.energy
        points = []
        for i in range(MASS_SEGMENTS):
            angle = i / MASS_SEGMENTS * math.tau
            deform = math.sin(angle * 3 + self.elapsed_ms * 0.002) * energy * 15
            r = base + deform
            points.append((cx + math.cos(angle) * r, cy + math.sin(angle) * r))
        return tuple(points)

    def draw(self):
        if not self.panel.enabled:
            return []

        panel = self.panel
        primary = panel.color
        accent = panel.accent_color
        cx, cy = panel.center
        cx += self.rumble_offset

        commands = [panel.background()]

        for i in range(len(self.rings) - 1, -1, -1):
            ring = self.rings[i]
            alpha = 50 + (RING_COUNT - i) * 30
            commands.append(circle(cx, cy, ring["radius"], rgba(primary, alpha), 3))

        inner = 40 * self.scale
        for bar in self.bars:
            a = bar["angle"]
            commands.append(line(
                cx + math.cos(a) * inner,
                cy + math.sin(a) * inner,
                cx + math.cos(a) * (inner + bar["height"]),
                cy + math.sin(a) * (inner + bar["height"]),
                rgba(accent, 180),
                4,
            ))

        commands.append(DrawCommand("polygon", self._mass(cx, cy), color=rgba(primary, 150)))
        commands.append(circle(cx, cy, 40 * self.scale * 0.6 / 2, rgba(accent, 200)))

        commands.extend(self.particles.draw())
        commands.extend(panel.label())
        return commands

    def cleanup(self):
        self.particles.prune()

    def dispose(self):
        self.particles.dispose()
        self.scale = 1.0
        for bar in self.bars:
            bar["height"] = 0.0
            bar["target_height"] = 0.0
