import numpy as np
import pytest

from bandpulse.frequency_bands import Category
from bandpulse.smoothing import EnergyHistory, EnergySmoother


def test_first_updates_follow_alpha():
    smoother = EnergySmoother(alpha=0.3)
    assert smoother.update(Category.DRUMS, 1.0) == pytest.approx(0.3)
    assert smoother.update(Category.DRUMS, 1.0) == pytest.approx(0.51)
    assert smoother.value(Category.VOCALS) == 0.0


def test_constant_input_converges():
    smoother = EnergySmoother(alpha=0.3)
    for _ in range(60):
        smoother.update(Category.BASS, 0.5)
    assert smoother.value(Category.BASS) == pytest.approx(0.5, abs=1e-6)


def test_alpha_one_tracks_raw():
    smoother = EnergySmoother(alpha=1.0)
    assert smoother.update(Category.HIGHS, 0.42) == pytest.approx(0.42)


@pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
def test_invalid_alpha(alpha):
    with pytest.raises(ValueError):
        EnergySmoother(alpha=alpha)


def test_history_only_for_configured_categories():
    smoother = EnergySmoother(history_size=8)
    smoother.update(Category.DRUMS, 0.2)
    smoother.update(Category.VOCALS, 0.2)
    assert len(smoother.history(Category.DRUMS)) == 1
    assert smoother.history(Category.VOCALS) is None


def test_history_records_raw_values():
    smoother = EnergySmoother(alpha=0.3, history_size=4)
    smoother.update(Category.BASS, 1.0)
    np.testing.assert_allclose(smoother.history(Category.BASS).values(), [1.0])


def test_history_before_wrap():
    history = EnergyHistory(4)
    history.push(1.0)
    history.push(2.0)
    np.testing.assert_allclose(history.values(), [1.0, 2.0])
    assert history.mean() == pytest.approx(1.5)


def test_history_wraps_oldest_first():
    history = EnergyHistory(4)
    for v in range(1, 7):
        history.push(float(v))
    assert history.cursor == 2
    assert len(history) == 4
    np.testing.assert_allclose(history.values(), [3.0, 4.0, 5.0, 6.0])


def test_history_clear():
    history = EnergyHistory(3)
    history.push(0.5)
    history.clear()
    assert len(history) == 0
    assert history.mean() == 0.0


def test_history_capacity_must_be_positive():
    with pytest.raises(ValueError):
        EnergyHistory(0)


def test_reset_zeroes_state_and_history():
    smoother = EnergySmoother()
    smoother.update(Category.DRUMS, 0.9)
    smoother.reset()
    assert smoother.values() == {c: 0.0 for c in Category}
    assert len(smoother.history(Category.DRUMS)) == 0
