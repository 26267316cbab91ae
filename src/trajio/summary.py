import math

import pandas as pd

from trajio.io.reader import TrajectoryReader

COLUMNS = ["id", "num_points", "length", "start_time", "end_time"]


def summarize(reader: TrajectoryReader) -> pd.DataFrame:
    """
    Reads every trajectory of the source from the start and returns one row
    per trajectory with its point count, planar length and time range.
    start_time/end_time are NaN when the source has no time channel.
    """
    reader.reset()
    rows = []
    while reader.has_next():
        traj = reader.read_next_temporal_trajectory()
        rows.append({
            "id": traj.id,
            "num_points": len(traj),
            "length": traj.length,
            "start_time": traj.start_time if traj.has_timestamps else math.nan,
            "end_time": traj.end_time if traj.has_timestamps else math.nan,
        })
    return pd.DataFrame(rows, columns=COLUMNS)
