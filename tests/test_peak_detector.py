import pytest

from bandpulse.frequency_bands import Category
from bandpulse.peak_detector import PeakDetector


def run(detector, values, category=Category.DRUMS):
    return [detector.detect(category, v).is_peak for v in values]


def test_decaying_note_is_debounced():
    # decayed memory: 0.855, 0.812, 0.772
    assert run(PeakDetector(), [0.9, 0.85, 0.8, 0.8]) == [True, False, False, True]


def test_sustained_loud_input_refires():
    # memory decays to 0.855 before each compare, so a flat 0.9 beats it
    assert run(PeakDetector(), [0.9, 0.9, 0.9]) == [True, True, True]


def test_below_threshold_never_fires():
    assert run(PeakDetector(), [0.6] * 10) == [False] * 10


def test_threshold_is_exclusive():
    assert run(PeakDetector(threshold=0.7), [0.7]) == [False]


def test_louder_hit_retriggers():
    assert run(PeakDetector(), [0.8, 0.95]) == [True, True]


def test_value_is_decayed_before_compare():
    detector = PeakDetector(decay=0.5)
    detector.detect(Category.BASS, 0.8)
    state = detector.detect(Category.BASS, 0.1)
    assert state.value == pytest.approx(0.4)
    assert not state.is_peak


def test_categories_are_independent():
    detector = PeakDetector()
    detector.detect(Category.DRUMS, 0.9)
    assert detector.states[Category.BASS].value == 0.0
    assert detector.detect(Category.BASS, 0.9).is_peak


def test_detect_returns_shared_state():
    detector = PeakDetector()
    assert detector.detect(Category.HIGHS, 0.9) is detector.states[Category.HIGHS]


def test_reset():
    detector = PeakDetector()
    detector.detect(Category.DRUMS, 0.9)
    detector.reset()
    state = detector.states[Category.DRUMS]
    assert state.value == 0.0
    assert not state.is_peak


@pytest.mark.parametrize("threshold, decay", [(-0.1, 0.95), (1.1, 0.95), (0.7, 0.0), (0.7, 1.0)])
def test_invalid_parameters(threshold, decay):
    with pytest.raises(ValueError):
        PeakDetector(threshold=threshold, decay=decay)
