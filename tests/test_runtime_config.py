import json

import pytest

import config
from bandpulse.runtime_config import RuntimeConfig
from configmanager import default_config_path


def test_defaults_fall_back_to_config_module():
    cfg = RuntimeConfig.defaults()
    assert cfg.FFT_SIZE == config.FFT_SIZE
    assert cfg.PEAK_THRESHOLD == config.PEAK_THRESHOLD
    assert cfg.PEAK_DECAY == config.PEAK_DECAY
    assert cfg.FRAME_RATE == config.FRAME_RATE
    assert cfg.ANALYSIS_RATE is None


def test_partial_sections_override(tmp_path):
    path = tmp_path / "bandpulse.json"
    path.write_text(json.dumps({
        "analysis": {"fft_size": 2048},
        "peaks": {"threshold": 0.6},
        "audio": {"analysis_rate": 48000},
    }))

    cfg = RuntimeConfig(str(path))
    assert cfg.FFT_SIZE == 2048
    assert cfg.PEAK_THRESHOLD == 0.6
    assert cfg.ANALYSIS_RATE == 48000
    assert cfg.ENERGY_SMOOTHING == config.ENERGY_SMOOTHING
    assert cfg.CANVAS_WIDTH == config.CANVAS_WIDTH


def test_shipped_config_file_loads():
    cfg = RuntimeConfig(default_config_path())
    assert cfg.FFT_SIZE == 1024
    assert cfg.HISTORY_SIZE == 43
    assert cfg.SILENCE_DB == -70.0
    assert cfg.COLOR_CACHE_SIZE == 1000


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        RuntimeConfig(str(tmp_path / "nope.json"))


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        RuntimeConfig(str(path))
