from bandpulse.frequency_bands import Category
from bandpulse.visualizers.bass import BassVisualizer
from bandpulse.visualizers.common import DrawCommand, Panel, ParticleEmitter, Visualizer, layout_grid
from bandpulse.visualizers.drums import DrumVisualizer
from bandpulse.visualizers.highs import HighsVisualizer
from bandpulse.visualizers.vocals import VocalVisualizer

__all__ = [
    "BassVisualizer",
    "DrawCommand",
    "DrumVisualizer",
    "HighsVisualizer",
    "Panel",
    "ParticleEmitter",
    "VocalVisualizer",
    "Visualizer",
    "create_visualizers",
    "layout_grid",
]


def create_visualizers(width, height, rng=None, pool=None) -> "dict[Category, Visualizer]":
    """One visualizer per category, laid out on a ``width`` x ``height`` canvas."""
    visualizers = {
        Category.DRUMS: DrumVisualizer(rng=rng, pool=pool),
        Category.VOCALS: VocalVisualizer(rng=rng, pool=pool),
        Category.BASS: BassVisualizer(rng=rng, pool=pool),
        Category.HIGHS: HighsVisualizer(rng=rng, pool=pool),
    }
    for category, bounds in layout_grid(width, height).items():
        visualizers[category].set_bounds(*bounds)
    return visualizers
