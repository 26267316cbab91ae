import argparse
import logging
import sys

from trajio.config import GPSConfig
from trajio.core.errors import ConfigurationError, MalformedFieldError
from trajio.io.factory import open_reader
from trajio.io.writer import CSVTrajectoryWriter
from trajio.logging_config import configure_logging
from trajio.summary import summarize

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trajio",
        description="Read trajectories from a vector dataset, a trajectory CSV or a GPS point CSV.",
    )
    parser.add_argument("file", help="Path to the GPS file.")
    parser.add_argument("--id", dest="id_name", default="id", help="Trajectory id column.")
    parser.add_argument("--geom", dest="geom_name", default="geom", help="WKT geometry column.")
    parser.add_argument("--x", dest="x_name", default="x", help="x column of a point file.")
    parser.add_argument("--y", dest="y_name", default="y", help="y column of a point file.")
    parser.add_argument("--timestamp", dest="timestamp_name", default="timestamp", help="Timestamp column.")
    parser.add_argument("--gps-point", action="store_true", help="The file holds one point per row.")
    parser.add_argument("--delimiter", default=",", help="Field delimiter of CSV input.")
    parser.add_argument("--output", help="Write the trajectories one per row to this CSV.")
    parser.add_argument("--summary", help="Write a per-trajectory summary to this CSV.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level.",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    config = GPSConfig(
        file=args.file,
        id_name=args.id_name,
        geom_name=args.geom_name,
        x_name=args.x_name,
        y_name=args.y_name,
        timestamp_name=args.timestamp_name,
        gps_point=args.gps_point,
        delimiter=args.delimiter,
    )

    try:
        reader = open_reader(config)
    except ConfigurationError as e:
        logger.critical("%s", e)
        return 1

    with reader:
        try:
            if args.output:
                with CSVTrajectoryWriter(args.output, write_timestamps=reader.has_time_stamp()) as writer:
                    while reader.has_next():
                        writer.write(reader.read_next_temporal_trajectory())
                logger.info("Wrote %d trajectories to %s", writer.count, args.output)

            summary = summarize(reader)
        except MalformedFieldError as e:
            logger.error("%s", e)
            return 2

    logger.info(
        "Read %d trajectories with %d points in total",
        len(summary),
        int(summary["num_points"].sum()),
    )
    if args.summary:
        summary.to_csv(args.summary, index=False)
        logger.info("Summary saved to %s", args.summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
