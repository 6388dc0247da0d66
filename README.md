# rmvision

Building blocks for a vision-based aiming system.

- `rmvision.kalman`: `ExtendedKalmanFilter` for a nonlinear process `f` and measurement `h`. Its Jacobians come from `numerical_jacobian`, which uses central differences.
- `rmvision.particle_filter`: `ParticleFilter`, which weights particles with `gaussian_likelihood`. It resamples when the effective particle count falls below half the particles.
- `rmvision.trajectory`: ballistic pitch compensation with `IdealCompensator` (no air resistance) and `ResistanceCompensator` (with drag). `create_compensator("ideal")` and `create_compensator("resistance")` build them; any other name raises `ValueError`.
- `rmvision.manual_compensator`: `ManualCompensator`, a table of hand-tuned pitch and yaw offsets. Entries are looked up by open distance and height ranges (`LineRegion`).
- `rmvision.pnp`: `PnPSolver` recovers a camera pose `(rvec, tvec)` from image points for named sets of object points. The module also has `project_points`, a pixel distance to the principal point and the reprojection error.
- `rmvision.rotation`: `euler_to_matrix` and `matrix_to_euler` for the six axis orders in `EulerOrder`, and `get_rpy`.
- `rmvision.heartbeat`: `HeartBeatPublisher`. From a background thread it calls `publish(topic, count)` once per interval, on the topic `<node_name>/heartbeat`, until stopped.
- `rmvision.logkit.types`: `LogLevel` (`DEBUG` to `FATAL`), with `html()` and `ansi()` colouring for each level. `LogOptions` holds flags for naming log files (`DATE_DIR`, `DATE_SUFFIX`, `OVER_WRITE`).
- `rmvision.common`: the `EnemyColor` and `VisionMode` enumerations. `enemy_color_to_string` and `vision_mode_to_string` return `"UNKNOWN"` for unknown values.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## Examples

Trajectory compensation. `compensate` returns the pitch angle in radians, or `None` when no angle hits the target:

```python
from rmvision.trajectory import create_compensator

comp = create_compensator("ideal")
comp.velocity = 25.0
pitch = comp.compensate((5.0, 0.0, 0.3))
```

Manual offsets. Each line gives the distance range, the height range, the pitch offset and the yaw offset:

```python
from rmvision.manual_compensator import ManualCompensator

mc = ManualCompensator()
mc.update_map_flow(["0 3 -1 1 0.01 0.0", "3 6 -1 1 0.02 0.0"])
pitch_offset, yaw_offset = mc.angle_hard_correct(4.0, 0.2)  # (0.02, 0.0)
```

Heartbeat:

```python
from rmvision.heartbeat import HeartBeatPublisher

with HeartBeatPublisher("detector", lambda topic, value: print(topic, value), interval=1.0):
    ...  # publishes "detector/heartbeat" 1, 2, 3, ... until the block ends
```

Colouring a log line:

```python
from rmvision.logkit.types import LogLevel

LogLevel.WARN.html("low battery")  # '<font color="#FFFF00">low battery</font>'
```

## What it does not do

- It has no logger. `rmvision.logkit` gives only the level and option types. Nothing in the package writes log files or keeps a registry of named loggers.
- It does not resolve `file://` or `package://` resource URLs.
- It has no command-line program. Everything is used as a library.

## Tests

```
pytest
```