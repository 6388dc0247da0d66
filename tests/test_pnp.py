import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from rmvision.pnp import PnPSolver, project_points

CAMERA = [600.0, 0.0, 320.0, 0.0, 600.0, 240.0, 0.0, 0.0, 1.0]
DISTORTION = [-0.1, 0.05, 0.001, -0.001, 0.0]
ARMOR = [
    [-0.0675, 0.0275, 0.0],
    [-0.0675, -0.0275, 0.0],
    [0.0675, -0.0275, 0.0],
    [0.0675, 0.0275, 0.0],
]
CUBE = [[x, y, z] for x in (-0.1, 0.1) for y in (-0.1, 0.1) for z in (-0.1, 0.1)]
TRUE_RVEC = np.array([0.1, -0.2, 0.05])
TRUE_TVEC = np.array([0.1, -0.05, 2.0])


def _solver(points, name="armor"):
    solver = PnPSolver(CAMERA, DISTORTION)
    solver.set_object_points(name, points)
    return solver


def _same_pose(rvec, tvec):
    r_est = Rotation.from_rotvec(rvec).as_matrix()
    r_true = Rotation.from_rotvec(TRUE_RVEC).as_matrix()
    return np.allclose(r_est, r_true, atol=1e-4) and np.allclose(tvec, TRUE_TVEC, atol=1e-4)


def test_project_point_on_optical_axis_hits_principal_point():
    uv = project_points([[0.0, 0.0, 1.0]], [0, 0, 0], [0, 0, 0], CAMERA, DISTORTION)
    assert np.allclose(uv, [[320.0, 240.0]])


def test_project_points_without_distortion_is_pinhole():
    uv = project_points([[0.5, -0.25, 2.0]], [0, 0, 0], [0, 0, 0], CAMERA)
    assert np.allclose(uv, [[320.0 + 600.0 * 0.5 / 2.0, 240.0 + 600.0 * -0.25 / 2.0]])


@pytest.mark.parametrize("points", [ARMOR, CUBE])
def test_solve_pnp_recovers_pose(points):
    solver = _solver(points)
    image = project_points(points, TRUE_RVEC, TRUE_TVEC, CAMERA, DISTORTION)
    rvec, tvec = solver.solve_pnp(image, "armor")
    assert _same_pose(rvec, tvec)
    assert solver.reprojection_error(image, rvec, tvec, "armor") < 1e-6


def test_generic_solutions_are_sorted_by_error():
    solver = _solver(ARMOR)
    image = project_points(ARMOR, TRUE_RVEC, TRUE_TVEC, CAMERA, DISTORTION)
    solutions = solver.solve_pnp_generic(image, "armor")
    assert solutions
    assert _same_pose(*solutions[0])
    errors = [solver.reprojection_error(image, r, t, "armor") for r, t in solutions]
    assert errors == sorted(errors)


def test_unknown_frame_gives_no_solution():
    solver = _solver(ARMOR)
    image = project_points(ARMOR, TRUE_RVEC, TRUE_TVEC, CAMERA, DISTORTION)
    assert solver.solve_pnp(image, "rune") is None
    assert solver.solve_pnp_generic(image, "rune") == []
    assert solver.reprojection_error(image, TRUE_RVEC, TRUE_TVEC, "rune") == 0.0


def test_reprojection_error_grows_with_offset():
    solver = _solver(ARMOR)
    image = project_points(ARMOR, TRUE_RVEC, TRUE_TVEC, CAMERA, DISTORTION)
    exact = solver.reprojection_error(image, TRUE_RVEC, TRUE_TVEC, "armor")
    shifted = solver.reprojection_error(image + 1.0, TRUE_RVEC, TRUE_TVEC, "armor")
    assert exact == pytest.approx(0.0, abs=1e-9)
    assert shifted == pytest.approx(4 * np.sqrt(2.0))


def test_distance_to_center():
    solver = PnPSolver(CAMERA, DISTORTION)
    assert solver.distance_to_center((320.0, 240.0)) == 0.0
    assert solver.distance_to_center((323.0, 244.0)) == pytest.approx(5.0)


def test_mismatched_point_counts_raise():
    solver = _solver(ARMOR)
    with pytest.raises(ValueError):
        solver.solve_pnp([[0.0, 0.0]] * 3, "armor")


def test_too_few_distortion_coefficients_raise():
    with pytest.raises(ValueError):
        PnPSolver(CAMERA, [0.1, 0.2])