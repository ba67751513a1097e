from pythonosc.udp_client import SimpleUDPClient

from bandpulse.frequency_bands import Category


class OSCSender:
    def __init__(self, ip="127.0.0.1", port=12000, prefix="/BandPulse", client=None):
        self.client = client or SimpleUDPClient(ip, port)
        self.prefix = prefix

    def send(self, path, value):
        self.client.send_message(path, value)

    def send_frame(self, energies, peaks):
        """Per category: ``<prefix>/<name>/energy`` float and ``<prefix>/<name>/peak`` int."""
        for category in Category:
            base = f"{self.prefix}/{category.label}"
            self.client.send_message(f"{base}/energy", float(energies[category]))
            self.client.send_message(f"{base}/peak", int(peaks[category].is_peak))

    def send_silence(self, value):
        self.client.send_message(f"{self.prefix}/silence", int(value))
