import io

import pytest
from rich.console import Console

from bandpulse import message
from bandpulse.console_meter import ConsoleMeter, energy_bar
from bandpulse.frequency_bands import Category
from bandpulse.osc_sender import OSCSender
from bandpulse.peak_detector import PeakState
from bandpulse.silence import SilenceGate


class RecordingClient:
    def __init__(self):
        self.messages = []

    def send_message(self, path, value):
        self.messages.append((path, value))


def frame(drums_peak=False):
    energies = {c: 0.25 * (int(c) + 1) for c in Category}
    peaks = {c: PeakState() for c in Category}
    peaks[Category.DRUMS].is_peak = drums_peak
    return energies, peaks


def test_osc_frame_paths():
    client = RecordingClient()
    osc = OSCSender(client=client)
    osc.send_frame(*frame(drums_peak=True))

    assert client.messages == [
        ("/BandPulse/drums/energy", 0.25),
        ("/BandPulse/drums/peak", 1),
        ("/BandPulse/vocals/energy", 0.5),
        ("/BandPulse/vocals/peak", 0),
        ("/BandPulse/bass/energy", 0.75),
        ("/BandPulse/bass/peak", 0),
        ("/BandPulse/highs/energy", 1.0),
        ("/BandPulse/highs/peak", 0),
    ]


def test_osc_silence_and_custom_prefix():
    client = RecordingClient()
    osc = OSCSender(prefix="/bp", client=client)
    osc.send_silence(False)
    assert client.messages == [("/bp/silence", 0)]


def test_silence_gate_waits_for_timeout():
    gate = SilenceGate(silence_db=-70.0, timeout=0.75)
    assert gate.update(-80.0, 0.0) is None
    assert gate.update(-80.0, 0.5) is None
    assert gate.update(-80.0, 0.8) is True
    assert gate.is_silent
    assert gate.update(-80.0, 1.0) is None
    assert gate.update(-20.0, 1.1) is False
    assert not gate.is_silent


def test_silence_gate_loud_block_resets_timer():
    gate = SilenceGate(silence_db=-70.0, timeout=0.75)
    gate.update(-80.0, 0.0)
    gate.update(-20.0, 0.6)
    assert gate.update(-80.0, 1.0) is None
    assert gate.update(-80.0, 1.4) is True


def test_spinners_cycle_per_category():
    meter = ConsoleMeter(console=Console(file=io.StringIO()))
    chars = [meter.spin(Category.DRUMS) for _ in range(5)]
    assert chars == ["¼", "▚", "-", "▞", "¼"]
    assert meter.spin(Category.HIGHS) == "¼"


@pytest.mark.parametrize("value, expected", [(0.0, "··········"), (0.5, "█████·····"), (1.5, "██████████")])
def test_energy_bar(value, expected):
    assert energy_bar(value, width=10) == expected


def test_meter_table_advances_spinner_on_peak():
    meter = ConsoleMeter(console=Console(file=io.StringIO()))
    table = meter.build(*frame(drums_peak=True), level_db=-42.0)

    assert table.row_count == 4
    assert meter.peak_chars[Category.DRUMS] == "¼"
    assert meter.peak_chars[Category.BASS] == " "
    assert "-42.0" in table.caption


def test_device_unavailable_panel(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr(message, "console", Console(file=out, width=100))
    message.Msg.device_unavailable(3, attempts=2)
    text = out.getvalue()
    assert "Microphone Unavailable" in text
    assert "device 3" in text


def test_renderer_blends_alpha_over_background():
    visual_debug = pytest.importorskip("bandpulse.visual_debug")
    bgr = visual_debug.CanvasRenderer._bgr
    assert bgr((255, 0, 0, 255)) == (0, 0, 255)
    assert bgr((255, 0, 0, 0)) == visual_debug.BACKGROUND_BGR
