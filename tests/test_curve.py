import numpy as np
import pytest

from vasetopia_core.curve import Curve


def test_append_keeps_prior_points_in_order():
    curve = Curve([(0.0, 0.0), (1.0, 0.5, 0.25)])
    before = curve.points
    curve.append((2.0, 3.0))
    after = curve.points
    assert after.shape == (3, 3)
    assert np.array_equal(after[:2], before)
    assert tuple(after[-1]) == (2.0, 3.0, 0.0)


def test_points_is_a_copy():
    curve = Curve([(1.0, 2.0)])
    pts = curve.points
    pts[0, 0] = 99.0
    assert curve[0] == (1.0, 2.0, 0.0)


def test_empty_curve_has_no_points():
    curve = Curve()
    assert len(curve) == 0
    assert curve.points.shape == (0, 3)
    assert curve.line_strip().shape == (0, 3)


def test_every_mutation_notifies_listeners():
    curve = Curve(name="profile")
    seen = []
    curve.subscribe(lambda c: seen.append(len(c)))
    curve.append((0.0, 0.0))
    curve.append((1.0, 1.0))
    curve.set_points([(5.0, 5.0), (6.0, 6.0), (7.0, 7.0)])
    curve.remove_last()
    curve.clear()
    assert seen == [1, 2, 3, 2, 0]
    assert curve.revision == 5


def test_unsubscribe_stops_notifications():
    curve = Curve()
    seen = []
    unsubscribe = curve.subscribe(lambda c: seen.append(c.revision))
    curve.append((0.0, 0.0))
    unsubscribe()
    curve.append((1.0, 0.0))
    assert seen == [1]


def test_remove_last_on_empty_curve():
    curve = Curve()
    assert curve.remove_last() is None
    assert curve.revision == 0


def test_append_rejects_wrong_dimension():
    curve = Curve()
    with pytest.raises(ValueError):
        curve.append((1.0,))
    with pytest.raises(ValueError):
        curve.append((1.0, 2.0, 3.0, 4.0))
    assert len(curve) == 0


def test_line_strip_is_float32():
    curve = Curve([(0.0, 0.0), (0.5, 1.0)])
    strip = curve.line_strip()
    assert strip.dtype == np.float32
    assert strip.shape == (2, 3)
