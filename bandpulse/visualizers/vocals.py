"""Vocals: layered flowing waveform with a breathing centre orb."""

import math
import random

import numpy as np

from bandpulse.frequency_bands import Category, group_for
from bandpulse.visualizers.common import (
    Panel,
    ParticleEmitter,
    circle,
    lerp_color,
    line,
    rgba,
)

WAVE_POINTS = 64
LAYERS = 3


class VocalVisualizer:
    def __init__(self, rng=None, pool=None, wave_points=WAVE_POINTS):
        group = group_for(Category.VOCALS)
        self.rng = rng or random.Random()
        self.panel = Panel(group.name, group.primary_color, group.accent_color)
        self.particles = ParticleEmitter(pool, max_particles=50, rng=self.rng)

        self.wave_data = np.zeros(wave_points, dtype=np.float64)
        self._offsets = np.arange(wave_points) * 0.15
        self.phase = 0.0
        self.amplitude = 0.0

    def set_bounds(self, x, y, width, height):
        self.panel.set_bounds(x, y, width, height)

    def toggle(self):
        return self.panel.toggle()

    def update(self, energy, peak=None, dt=1.0):
        if not self.panel.enabled:
            return

        self.panel.track(energy)
        self.particles.update(dt)
        if peak is not None and peak.is_peak:
            self.particles.burst(self.panel, energy, self.panel.color)

        self.phase += 0.05 + energy * 0.1

        target_amp = energy * self.panel.height * 0.35
        self.amplitude += (target_amp - self.amplitude) * 0.15

        target = np.sin(self.phase + self._offsets) * self.amplitude
        self.wave_data += (target - self.wave_data) * 0.2

    # -----------------------------------------------------

    def _points(self, layer):
        panel = self.panel
        cy = panel.y + panel.height / 2
        n = self.wave_data.size
        offset = layer * 0.5
        scale = 1 - layer * 0.2
        points = []
        for i in range(n):
            x = panel.x + i / (n - 1) * panel.width
            y = cy + self.wave_data[i] * scale + math.sin(self.phase + offset + i * 0.1) * 10
            points.append((x, y))
        return points

    def draw(self):
        if not self.panel.enabled:
            return []

        panel = self.panel
        primary = panel.color
        accent = panel.accent_color
        commands = [panel.background()]

        for layer in range(LAYERS):
            alpha = 200 - layer * 60
            points = self._points(layer)
            n = len(points)
            for i in range(n - 1):
                color = lerp_color(primary, accent, i / n)
                (x1, y1), (x2, y2) = points[i], points[i + 1]
                commands.append(line(x1, y1, x2, y2, rgba(color, alpha), 3 - layer))

            if layer == 0:
                for i in range(0, n, 8):
                    x, y = points[i]
                    glow = 10 + panel.energy * 20
                    commands.append(circle(x, y, glow / 2, rgba(primary, 50)))

        cx, cy = panel.center
        orb = 30 + panel.energy * 50
        commands.append(circle(cx, cy, orb * 1.5 / 2, rgba(primary, 30)))
        commands.append(circle(cx, cy, orb / 2, rgba(primary, 100)))
        commands.append(circle(cx, cy, orb * 0.5 / 2, rgba(accent, 200)))

        commands.extend(self.particles.draw())
        commands.extend(panel.label())
        return commands

    def cleanup(self):
        self.particles.prune()

    def dispose(self):
        self.particles.dispose()
        self.wave_data.fill(0.0)
        self.amplitude = 0.0
        self.phase = 0.0
