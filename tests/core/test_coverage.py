"""Coverage — approximate cell size labels."""

import pytest

from geobookmarks.core.coverage import coverage_label, coverage_meters


@pytest.mark.parametrize("length, label", [
    (1, "~5000 km"),
    (2, "~1250 km"),
    (3, "~156 km"),
    (4, "~39.1 km"),
    (5, "~4.9 km"),
    (6, "~1.2 km"),
    (7, "~0.2 km"),
])
def test_coverage_label(length, label):
    assert coverage_label(length) == label


def test_coverage_shrinks_by_quarter_past_ten():
    assert coverage_meters(11) == pytest.approx(1.19 * 0.25)
    assert coverage_meters(12) == pytest.approx(1.19 * 0.0625)
