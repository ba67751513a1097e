"""Drums: pulsing circle, expanding ripples on hits, radial bars."""

import math
import random

from bandpulse.frequency_bands import Category, group_for
from bandpulse.visualizers.common import (
    WHITE,
    Panel,
    ParticleEmitter,
    circle,
    line,
    rgba,
)

MAX_RIPPLES = 5
RIPPLE_FADE = 0.92
RIPPLE_MIN_ALPHA = 5
BAR_COUNT = 8


class Ripple:
    __slots__ = ("x", "y", "size", "max_size", "alpha", "active")

    def __init__(self):
        self.x = 0.0
        self.y = 0.0
        self.size = 0.0
        self.max_size = 0.0
        self.alpha = 0.0
        self.active = False


class DrumVisualizer:
    def __init__(self, rng=None, pool=None):
        group = group_for(Category.DRUMS)
        self.rng = rng or random.Random()
        self.panel = Panel(group.name, group.primary_color, group.accent_color)
        self.particles = ParticleEmitter(pool, max_particles=50, rng=self.rng)

        self.pulse_size = 0.0
        self.ripples = [Ripple() for _ in range(MAX_RIPPLES)]

    # -----------------------------------------------------

    def set_bounds(self, x, y, width, height):
        self.panel.set_bounds(x, y, width, height)

    def toggle(self):
        return self.panel.toggle()

    @property
    def active_ripples(self):
        return [r for r in self.ripples if r.active]

    def update(self, energy, peak=None, dt=1.0):
        if not self.panel.enabled:
            return

        self.panel.track(energy)
        self.particles.update(dt)

        is_peak = peak is not None and peak.is_peak
        if is_peak:
            self.particles.burst(self.panel, energy, self.panel.color)

        target = energy * self.panel.height * 0.4
        self.pulse_size += (target - self.pulse_size) * 0.3

        if is_peak and energy > 0.5:
            self._trigger_ripple(energy)

        for ripple in self.ripples:
            if not ripple.active:
                continue
            ripple.size += (ripple.max_size - ripple.size) * 0.1
            ripple.alpha *= RIPPLE_FADE
            if ripple.alpha < RIPPLE_MIN_ALPHA:
                ripple.active = False

    def _trigger_ripple(self, energy):
        # a full set of rings drops the new hit
        for ripple in self.ripples:
            if ripple.active:
                continue
            ripple.x, ripple.y = self.panel.center
            ripple.size = self.pulse_size
            ripple.max_size = self.panel.height * 0.8 * energy
            ripple.alpha = 255.0
            ripple.active = True
            return True
        return False

    # -----------------------------------------------------

    def draw(self):
        if not self.panel.enabled:
            return []

        panel = self.panel
        cx, cy = panel.center
        primary = panel.color
        accent = panel.accent_color

        commands = [panel.background()]

        for ripple in self.ripples:
            if ripple.active:
                commands.append(circle(ripple.x, ripple.y, ripple.size / 2, rgba(primary, ripple.alpha), 2))

        glow = self.pulse_size * 1.5
        commands.append(circle(cx, cy, glow / 2, rgba(primary, 30)))
        commands.append(circle(cx, cy, self.pulse_size / 2, rgba(primary, 200)))
        commands.append(circle(cx, cy, self.pulse_size * 0.3 / 2, rgba(WHITE, 150 + panel.energy * 105)))

        bar_length = panel.energy * panel.height * 0.3
        inner = self.pulse_size * 0.6
        for i in range(BAR_COUNT):
            angle = i / BAR_COUNT * math.tau
            commands.append(line(
                cx + math.cos(angle) * inner,
                cy + math.sin(angle) * inner,
                cx + math.cos(angle) * (inner + bar_length),
                cy + math.sin(angle) * (inner + bar_length),
                rgba(accent, 150),
                3,
            ))

        commands.extend(self.particles.draw())
        commands.extend(panel.label())
        return commands

    def cleanup(self):
        self.particles.prune()

    def dispose(self):
        self.particles.dispose()
        for ripple in self.ripples:
            ripple.active = False
        self.pulse_size = 0.0
