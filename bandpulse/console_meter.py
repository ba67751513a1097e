"""Terminal meter for the four categories.

Draws one row per category with a bar for the smoothed energy and a spinner
character that advances on every peak of that category, so hits show up as a
simple animation. Purely human feedback; nothing here feeds back into
analysis.
"""

from rich.live import Live
from rich.table import Table

from bandpulse.frequency_bands import Category

BAR_WIDTH = 30
SPINNER_CHARS = "¼▚-▞"


def energy_bar(value, width=BAR_WIDTH):
    filled = int(round(max(0.0, min(1.0, value)) * width))
    return "█" * filled + "·" * (width - filled)


class ConsoleMeter:
    def __init__(self, console=None):
        self.spinner_state = {c: 0 for c in Category}
        self.peak_chars = {c: " " for c in Category}
        self.live = Live(console=console, auto_refresh=False, transient=True)

    def __enter__(self):
        self.live.start()
        return self

    def __exit__(self, *exc):
        self.live.stop()
        return False

    def spin(self, category) -> str:
        """Advance the category's spinner and return its new character."""
        state = self.spinner_state[category]
        self.peak_chars[category] = SPINNER_CHARS[state]
        self.spinner_state[category] = (state + 1) % len(SPINNER_CHARS)
        return self.peak_chars[category]

    def build(self, energies, peaks, level_db=None, silent=False):
        table = Table(title="🎚 BandPulse" + ("  🔇" if silent else ""), expand=False)
        table.add_column("Band", style="bold")
        table.add_column("Energy")
        table.add_column("%", justify="right")
        table.add_column("Peak", justify="center")

        for category in Category:
            if peaks[category].is_peak:
                self.spin(category)
            table.add_row(
                category.label,
                energy_bar(energies[category]),
                f"{energies[category] * 100:5.1f}",
                self.peak_chars[category],
            )

        if level_db is not None:
            table.caption = f"level {level_db:.1f} dB"
        return table

    def update(self, energies, peaks, level_db=None, silent=False):
        self.live.update(self.build(energies, peaks, level_db, silent), refresh=True)
