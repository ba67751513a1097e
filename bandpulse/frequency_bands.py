# bandpulse/frequency_bands.py
"""Frequency ranges of interest and how they group into visual categories.

The table is based on the typical ranges of musical instruments: each
``FrequencyBand`` is a named Hz interval with a display colour, and each
``BandGroup`` combines a few bands with weights into one perceptual category
(drums, vocals, bass, highs). Both are defined once at import time and never
mutated.
"""

from dataclasses import dataclass
from enum import IntEnum


class Category(IntEnum):
    DRUMS = 0
    VOCALS = 1
    BASS = 2
    HIGHS = 3

    @property
    def label(self):
        return self.name.lower()


@dataclass(frozen=True)
class FrequencyBand:
    name: str
    min_hz: float
    max_hz: float
    color: tuple

    def __post_init__(self):
        if not 0 <= self.min_hz < self.max_hz:
            raise ValueError(
                f"band {self.name!r} needs 0 <= min_hz < max_hz, "
                f"got {self.min_hz}..{self.max_hz}"
            )


@dataclass(frozen=True)
class BandGroup:
    name: str
    bands: tuple
    weights: tuple
    primary_color: tuple
    accent_color: tuple

    def __post_init__(self):
        if len(self.bands) != len(self.weights):
            raise ValueError(
                f"group {self.name!r} has {len(self.bands)} bands "
                f"but {len(self.weights)} weights"
            )


FREQUENCY_BANDS = {
    # Sub-bass and bass drum fundamentals
    "SUB_BASS": FrequencyBand("Sub Bass", 20, 60, (128, 0, 255)),
    # Bass guitar, kick drum body
    "BASS": FrequencyBand("Bass", 60, 250, (255, 0, 100)),

    # Kick, snare body, toms
    "DRUMS_LOW": FrequencyBand("Drums Low", 60, 200, (255, 50, 50)),
    # Snare snap, high toms
    "DRUMS_MID": FrequencyBand("Drums Mid", 200, 2000, (255, 100, 50)),
    # Hi-hats, cymbals
    "DRUMS_HIGH": FrequencyBand("Drums High", 2000, 8000, (255, 200, 50)),

    # Vocal fundamentals
    "VOCALS_LOW": FrequencyBand("Vocals Low", 80, 300, (50, 200, 255)),
    # Presence
    "VOCALS_MID": FrequencyBand("Vocals Mid", 300, 2000, (100, 150, 255)),
    # Sibilance
    "VOCALS_HIGH": FrequencyBand("Vocals High", 2000, 8000, (150, 100, 255)),

    # Guitar, keys
    "INSTRUMENTS_LOW": FrequencyBand("Instruments Low", 80, 400, (50, 255, 100)),
    "INSTRUMENTS_MID": FrequencyBand("Instruments Mid", 400, 2000, (100, 255, 150)),
    # Leads, synths
    "INSTRUMENTS_HIGH": FrequencyBand("Instruments High", 2000, 6000, (150, 255, 200)),

    # Brilliance, sparkle
    "AIR": FrequencyBand("Air", 8000, 20000, (255, 255, 255)),
}


VISUALIZER_GROUPS = {
    Category.DRUMS: BandGroup(
        name="Drums",
        bands=("DRUMS_LOW", "DRUMS_MID", "DRUMS_HIGH"),
        weights=(0.5, 0.3, 0.2),  # kick/snare first
        primary_color=(255, 80, 50),
        accent_color=(255, 150, 100),
    ),
    Category.VOCALS: BandGroup(
        name="Vocals",
        bands=("VOCALS_LOW", "VOCALS_MID", "VOCALS_HIGH"),
        weights=(0.2, 0.5, 0.3),  # presence first
        primary_color=(100, 150, 255),
        accent_color=(180, 200, 255),
    ),
    Category.BASS: BandGroup(
        name="Bass",
        bands=("SUB_BASS", "BASS"),
        weights=(0.4, 0.6),
        primary_color=(200, 0, 200),
        accent_color=(255, 100, 255),
    ),
    Category.HIGHS: BandGroup(
        name="Highs",
        bands=("INSTRUMENTS_HIGH", "AIR"),
        weights=(0.6, 0.4),
        primary_color=(100, 255, 200),
        accent_color=(200, 255, 255),
    ),
}


def group_for(category):
    return VISUALIZER_GROUPS[Category(category)]
