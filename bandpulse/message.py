"""
BandPulse
---------
Message module
for reporting an unusable input device.

Builds a styled Rich console panel telling the user the microphone could not
be opened and what to try next. Shown once by the host after every start
attempt has failed.
"""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console()


class Msg:
    @staticmethod
    def device_unavailable(device_index=None, attempts=1):
        device = "default input" if device_index is None else f"device {device_index}"

        message = Text()
        message.append("The audio input could not be opened.\n\n", style="bold red")
        message.append("Device:\n", style="bold")
        message.append(f"{device} ({attempts} attempt(s))\n\n", style="cyan")
        message.append("➡ Check microphone permissions, or run with --list-devices", style="yellow")
        message.append(" and pick one with --device-index.", style="yellow")

        console.print(
            Panel(
                message,
                title="Microphone Unavailable",
                border_style="red",
                padding=(1, 2),
            )
        )
