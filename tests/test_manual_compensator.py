import pytest

from rmvision.manual_compensator import (
    LineRegion,
    ManualCompensator,
    parse_line,
)


def test_region_contains_is_open():
    region = LineRegion(0.0, 10.0)
    assert region.contains(5.0)
    assert not region.contains(0.0)
    assert not region.contains(10.0)
    assert not region.contains(-1.0)


def test_region_intersects_by_endpoints():
    region = LineRegion(0.0, 10.0)
    assert region.intersects(LineRegion(5.0, 15.0))
    assert region.intersects(LineRegion(-5.0, 5.0))
    assert not region.intersects(LineRegion(10.0, 20.0))
    # Only the other region's endpoints are checked.
    assert not LineRegion(2.0, 3.0).intersects(LineRegion(0.0, 10.0))


def test_parse_line_returns_six_numbers():
    assert parse_line("0 10 -1 5 0.5 -0.25") == [0.0, 10.0, -1.0, 5.0, 0.5, -0.25]


@pytest.mark.parametrize("text", ["", "1 2 3", "1 2 3 4 5 6 7", "a b c d e f"])
def test_parse_line_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_line(text)


def test_lookup_inside_and_outside():
    comp = ManualCompensator()
    assert comp.update_map(LineRegion(0, 10), LineRegion(0, 5), 0.1, 0.2)
    assert comp.angle_hard_correct(3.0, 2.0) == (0.1, 0.2)
    assert comp.angle_hard_correct(11.0, 2.0) == (0.0, 0.0)
    assert comp.angle_hard_correct(3.0, 6.0) == (0.0, 0.0)


def test_height_clash_is_rejected():
    comp = ManualCompensator()
    assert comp.update_map(LineRegion(0, 10), LineRegion(0, 5), 0.1, 0.2)
    assert not comp.update_map(LineRegion(1, 9), LineRegion(2, 7), 0.3, 0.4)
    assert comp.angle_hard_correct(3.0, 2.0) == (0.1, 0.2)
    assert len(comp.angle_offset_map) == 1


def test_second_height_added_to_matching_distance():
    comp = ManualCompensator()
    assert comp.update_map(LineRegion(0, 10), LineRegion(0, 5), 0.1, 0.2)
    assert comp.update_map(LineRegion(1, 9), LineRegion(5, 8), 0.3, 0.4)
    assert len(comp.angle_offset_map) == 1
    assert len(comp.angle_offset_map[0].height_map) == 2
    assert comp.angle_hard_correct(3.0, 6.0) == (0.3, 0.4)


def test_update_map_by_str():
    comp = ManualCompensator()
    assert comp.update_map_by_str("0 10 0 5 0.5 -0.5")
    assert comp.angle_hard_correct(1.0, 1.0) == (0.5, -0.5)
    assert not comp.update_map_by_str("0 10 0")
    assert not comp.update_map_by_str("x 10 0 5 1 1")


def test_update_map_flow_stops_at_first_failure():
    comp = ManualCompensator()
    ok = comp.update_map_flow(["0 10 0 5 1 2", "bad", "20 30 0 5 3 4"])
    assert not ok
    assert comp.angle_hard_correct(25.0, 1.0) == (0.0, 0.0)
    assert comp.angle_hard_correct(5.0, 1.0) == (1.0, 2.0)


def test_update_map_flow_all_good():
    comp = ManualCompensator()
    assert comp.update_map_flow(["0 10 0 5 1 2", "20 30 0 5 3 4"])
    assert comp.angle_hard_correct(25.0, 1.0) == (3.0, 4.0)