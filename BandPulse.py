import argparse
import asyncio
import contextlib
import logging
import time

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import config
from configmanager import default_config_path
from bandpulse.audio_stream import PyAudioSpectrumSource, list_input_devices
from bandpulse.band_analyzer import BandAnalyzer
from bandpulse.console_meter import ConsoleMeter
from bandpulse.frequency_bands import Category
from bandpulse.memory_manager import MemoryManager
from bandpulse.message import Msg
from bandpulse.object_pool import particle_pool
from bandpulse.osc_sender import OSCSender
from bandpulse.runtime_config import RuntimeConfig
from bandpulse.silence import SilenceGate

logger = logging.getLogger("BandPulse")

KEY_TOGGLES = {
    "1": Category.DRUMS,
    "2": Category.VOCALS,
    "3": Category.BASS,
    "4": Category.HIGHS,
}

parser = argparse.ArgumentParser(
    description="Real-time drums / vocals / bass / highs energy and peak detection"
)

parser.add_argument(
    "--config",
    default=None,
    help="Runtime config JSON (default: config/bandpulse.json)"
)

parser.add_argument(
    "--device-index",
    type=int,
    default=None,
    help="PyAudio input device index (default: system default)"
)

parser.add_argument(
    "--channels",
    type=int,
    default=None,
    help="PyAudio input device channel number (default: from config)"
)

parser.add_argument(
    "--fps",
    type=int,
    default=None,
    help="Analysis / render frame rate (default: from config)"
)

parser.add_argument(
    "--osc",
    action="store_true",
    help="If present, publish energies and peaks over OSC"
)

parser.add_argument(
    "--osc-ip",
    default=config.OSC_IP,
    help=f"OSC server IP address (default: {config.OSC_IP})"
)

parser.add_argument(
    "--osc-port",
    type=int,
    default=config.OSC_PORT,
    help=f"OSC server port (default: {config.OSC_PORT})"
)

parser.add_argument(
    "--visual",
    action="store_true",
    help="If present, open the OpenCV visualizer window"
)

parser.add_argument(
    "--meter",
    action="store_true",
    help="If present, show the console meter (on by default without --visual / --osc)"
)

parser.add_argument(
    "--debug",
    action="store_true",
    help="If present, log at DEBUG level"
)

parser.add_argument(
    "--retries",
    type=int,
    default=0,
    help="Extra attempts to open the input device (default: 0)"
)

parser.add_argument(
    "--list-devices",
    action="store_true",
    help="List audio input devices and exit"
)


def setup_logging(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=debug)],
    )


def print_devices():
    table = Table(title="🎧 Audio input devices")
    table.add_column("Index", justify="right")
    table.add_column("Name")
    table.add_column("Channels", justify="right")
    table.add_column("Rate", justify="right")
    for index, name, channels, rate in list_input_devices():
        table.add_row(str(index), name, str(channels), str(rate))
    Console().print(table)


async def start_with_retries(analyzer, retries):
    attempts = retries + 1
    for attempt in range(1, attempts + 1):
        if await analyzer.start_listening():
            return True
        if attempt < attempts:
            logger.warning("Input device unavailable, retrying (%d/%d)...", attempt, retries)
            await asyncio.sleep(1.0)
    return False


async def run(args, cfg):
    fps = args.fps or cfg.FRAME_RATE

    source = PyAudioSpectrumSource(
        device_index=args.device_index,
        channels=args.channels or cfg.CHANNELS,
        device_rate=cfg.DEVICE_RATE,
        analysis_rate=cfg.ANALYSIS_RATE,
        frames_per_buffer=cfg.FRAMES_PER_BUFFER,
        fft_size=cfg.FFT_SIZE,
        smoothing=cfg.SPECTRUM_SMOOTHING,
        min_db=cfg.MIN_DB,
        max_db=cfg.MAX_DB,
    )

    analyzer = BandAnalyzer(
        source,
        fft_size=cfg.FFT_SIZE,
        spectrum_smoothing=cfg.SPECTRUM_SMOOTHING,
        energy_smoothing=cfg.ENERGY_SMOOTHING,
        peak_threshold=cfg.PEAK_THRESHOLD,
        peak_decay=cfg.PEAK_DECAY,
        history_size=cfg.HISTORY_SIZE,
    )

    await analyzer.init()
    if not await start_with_retries(analyzer, args.retries):
        Msg.device_unavailable(args.device_index, args.retries + 1)
        await analyzer.dispose()
        return 1

    memory = MemoryManager(
        cleanup_interval=cfg.CLEANUP_INTERVAL,
        monitor_interval=cfg.MONITOR_INTERVAL,
        warning_threshold=cfg.MEMORY_WARNING_THRESHOLD,
        color_cache_size=cfg.COLOR_CACHE_SIZE,
    )
    memory.register_pool("particles", particle_pool)

    visualizers = {}
    renderer = None
    if args.visual:
        # cv2 is only needed with a window
        from bandpulse.visual_debug import CanvasRenderer
        from bandpulse.visualizers import create_visualizers

        visualizers = create_visualizers(cfg.CANVAS_WIDTH, cfg.CANVAS_HEIGHT)
        for vis in visualizers.values():
            memory.on_cleanup(vis.cleanup)
        renderer = CanvasRenderer(cfg.CANVAS_WIDTH, cfg.CANVAS_HEIGHT)

    osc = None
    if args.osc:
        osc = OSCSender(ip=args.osc_ip, port=args.osc_port, prefix=config.OSC_PREFIX)
        logger.info("🎛 OSC → %s:%d %s", args.osc_ip, args.osc_port, config.OSC_PREFIX)

    meter = ConsoleMeter() if args.meter else None
    gate = SilenceGate(cfg.SILENCE_DB)

    memory.start_monitoring()

    frame_time = 1.0 / fps
    last = time.perf_counter()

    try:
        with meter if meter is not None else contextlib.nullcontext():
            while True:
                now = time.perf_counter()
                dt = (now - last) * 60.0
                last = now

                analyzer.cycle()
                energies = analyzer.get_energies()
                peaks = analyzer.get_peaks()

                change = gate.update(source.level_db, now)
                if change is True:
                    logger.info("🔇 SILENCE")
                elif change is False:
                    logger.info("🎵 AUDIO RESUMED")

                if osc is not None:
                    if change is not None:
                        osc.send_silence(0 if change else 1)
                    osc.send_frame(energies, peaks)

                if meter is not None:
                    meter.update(energies, peaks, source.level_db, gate.is_silent)

                if renderer is not None:
                    renderer.clear()
                    for category, vis in visualizers.items():
                        vis.update(energies[category], peaks[category], dt)
                        renderer.draw(vis.draw())

                    if renderer.show_debug:
                        stats = particle_pool.get_stats()
                        renderer.draw_debug([
                            f"fps {fps}  cycle {analyzer.cycle_count}",
                            f"level {source.level_db:.1f} dB",
                            f"particles active {stats['active']} pooled {stats['available']}",
                        ])

                    key = renderer.render()
                    if key == "q":
                        break
                    if key in KEY_TOGGLES:
                        enabled = visualizers[KEY_TOGGLES[key]].toggle()
                        logger.debug("%s %s", KEY_TOGGLES[key].label, "on" if enabled else "off")
                    elif key == "d":
                        renderer.show_debug = not renderer.show_debug

                memory.update(now)

                await asyncio.sleep(max(0.0, frame_time - (time.perf_counter() - now)))
    finally:
        if renderer is not None:
            renderer.close()
        for vis in visualizers.values():
            vis.dispose()
        memory.dispose()
        await analyzer.dispose()

    return 0


def main():
    args = parser.parse_args()
    setup_logging(args.debug)

    if args.list_devices:
        print_devices()
        return 0

    if not (args.visual or args.osc):
        args.meter = True

    cfg = RuntimeConfig(args.config or default_config_path())

    try:
        return asyncio.run(run(args, cfg))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
