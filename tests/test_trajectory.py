import math

import pytest

from rmvision.trajectory import (
    IdealCompensator,
    ResistanceCompensator,
    TrajectoryCompensator,
    create_compensator,
)


def test_defaults():
    comp = IdealCompensator()
    assert comp.velocity == 15.0
    assert comp.iteration_times == 20
    assert comp.gravity == 9.8
    assert comp.resistance == 0.01


def test_factory():
    assert isinstance(create_compensator("ideal"), IdealCompensator)
    assert isinstance(create_compensator("resistance"), ResistanceCompensator)
    with pytest.raises(ValueError):
        create_compensator("magic")


def test_base_is_abstract():
    with pytest.raises(TypeError):
        TrajectoryCompensator()


@pytest.mark.parametrize("cls", [IdealCompensator, ResistanceCompensator])
@pytest.mark.parametrize("target", [(5.0, 0.0, 0.0), (3.0, 4.0, 1.0), (6.0, -2.0, -0.5)])
def test_compensated_pitch_hits_target(cls, target):
    comp = cls()
    pitch = comp.compensate(target)
    assert pitch is not None
    distance = math.hypot(target[0], target[1])
    assert abs(comp.calculate_trajectory(distance, pitch) - target[2]) < 0.01
    assert pitch > math.atan2(target[2], distance)


def test_steep_target_is_rejected():
    assert IdealCompensator().compensate((0.1, 0.0, 10.0)) is None


def test_out_of_range_target_is_rejected():
    comp = IdealCompensator(velocity=3.0)
    assert comp.compensate((100.0, 0.0, 0.0)) is None


def test_zero_iterations_returns_direct_angle():
    comp = IdealCompensator(iteration_times=0)
    assert comp.compensate((4.0, 0.0, 4.0)) == pytest.approx(math.atan2(4.0, 4.0))


def test_trajectory_samples():
    comp = IdealCompensator()
    points = comp.trajectory(1.0, 0.2)
    assert points[0] == (0.0, 0.0)
    xs = [x for x, _ in points]
    assert xs == sorted(xs)
    assert xs[-1] < 1.0
    assert xs[-1] + 0.03 >= 1.0 - 1e-9
    for x, y in points:
        assert y == comp.calculate_trajectory(x, 0.2)


def test_trajectory_negative_distance_is_empty():
    assert IdealCompensator().trajectory(-1.0, 0.1) == []


def test_resistance_takes_longer():
    target = (10.0, 0.0, 1.0)
    assert ResistanceCompensator().flying_time(target) > IdealCompensator().flying_time(target)


def test_resistance_is_clamped():
    none = ResistanceCompensator(resistance=0.0)
    tiny = ResistanceCompensator(resistance=1e-4)
    assert none.calculate_trajectory(5.0, 0.1) == tiny.calculate_trajectory(5.0, 0.1)
    assert none.flying_time((5.0, 0.0, 0.0)) == tiny.flying_time((5.0, 0.0, 0.0))


def test_ideal_flying_time_level_target():
    assert IdealCompensator().flying_time((15.0, 0.0, 0.0)) == pytest.approx(1.0)