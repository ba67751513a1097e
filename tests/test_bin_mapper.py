import pytest

from bandpulse.bin_mapper import BinRange, ConfigurationError, map_all, map_band
from bandpulse.frequency_bands import FREQUENCY_BANDS, FrequencyBand


def test_sub_bass_at_44100_1024():
    band = FrequencyBand("Sub Bass", 20, 60, (0, 0, 0))
    assert map_band(band, 44100, 1024) == BinRange(0, 2)


def test_table_ranges_at_44100_1024():
    ranges = map_all(44100, 1024)
    assert ranges["BASS"] == BinRange(1, 6)
    assert ranges["DRUMS_LOW"] == BinRange(1, 5)
    assert ranges["DRUMS_MID"] == BinRange(4, 47)
    assert ranges["DRUMS_HIGH"] == BinRange(46, 186)
    assert ranges["AIR"] == BinRange(185, 465)


def test_other_sample_rate_changes_ranges():
    ranges = map_all(48000, 1024)
    assert ranges["AIR"] == BinRange(170, 427)


def test_every_band_is_mapped_with_start_before_end():
    ranges = map_all(44100, 1024)
    assert set(ranges) == set(FREQUENCY_BANDS)
    for r in ranges.values():
        assert 0 <= r.start < r.end


def test_no_clamping_above_nyquist():
    ranges = map_all(8000, 256)
    # 8 kHz..20 kHz lies entirely above the 4 kHz Nyquist limit
    assert ranges["AIR"] == BinRange(256, 640)


def test_map_all_is_cached_and_deterministic():
    assert map_all(44100, 1024) is map_all(44100, 1024)
    assert dict(map_all(44100, 2048)) == dict(map_all(44100, 2048))


def test_map_all_is_read_only():
    ranges = map_all(44100, 1024)
    with pytest.raises(TypeError):
        ranges["AIR"] = BinRange(0, 1)


@pytest.mark.parametrize(
    "sample_rate, fft_size",
    [(44100, 0), (44100, -1024), (44100, 1024.5), (44100, True), (0, 1024), (-44100, 1024)],
)
def test_invalid_format_raises(sample_rate, fft_size):
    with pytest.raises(ConfigurationError):
        map_band(FREQUENCY_BANDS["BASS"], sample_rate, fft_size)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        map_all(44100, 0)


def test_bin_range_length():
    assert len(BinRange(4, 47)) == 43
    assert len(BinRange(5, 5)) == 0
