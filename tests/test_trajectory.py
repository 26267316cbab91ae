import pytest

from trajio.core.trajectory import TemporalTrajectory, Trajectory


def test_length_and_linestring():
    traj = Trajectory(id=1, points=[(0.0, 0.0), (3.0, 4.0), (3.0, 5.0)])
    assert len(traj) == 3
    assert traj.length == pytest.approx(6.0)
    assert list(traj.linestring.coords) == traj.points


def test_single_point_trajectory():
    traj = Trajectory(id=1, points=[(1.0, 1.0)])
    assert traj.length == 0.0
    with pytest.raises(ValueError, match="fewer than two points"):
        traj.linestring


def test_temporal_lengths_must_match():
    with pytest.raises(ValueError, match="2 points but 1 timestamps"):
        TemporalTrajectory(id=1, points=[(0.0, 0.0), (1.0, 1.0)], timestamps=[0.0])


def test_temporal_without_timestamps():
    traj = TemporalTrajectory(id=1, points=[(0.0, 0.0)])
    assert not traj.has_timestamps
    with pytest.raises(ValueError):
        traj.start_time
    assert traj.to_trajectory() == Trajectory(id=1, points=[(0.0, 0.0)])


def test_time_range():
    traj = TemporalTrajectory(id=1, points=[(0.0, 0.0), (1.0, 1.0)], timestamps=[3.0, 8.0])
    assert traj.start_time == 3.0
    assert traj.end_time == 8.0


def test_trajectories_are_not_hashable():
    assert Trajectory.__hash__ is None
    assert TemporalTrajectory.__hash__ is None
    with pytest.raises(TypeError):
        hash(Trajectory(id=1, points=[(0.0, 0.0)]))
    assert Trajectory(id=1, points=[(0.0, 0.0)]) == Trajectory(id=1, points=[(0.0, 0.0)])
