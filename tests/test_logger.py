import csv

import pytest

from dropsim.dynamics.state import DataPoint
from dropsim.logger import CSVLogger


def make_point(t=0.0):
    return DataPoint(time=t, position=200.0 - t, velocity=-9.81 * t, acceleration=-9.81)


def test_logger_basic_io(tmp_path):
    """Test that logger creates file and writes header + data correctly."""
    log_path = tmp_path / "test_basic.csv"

    with CSVLogger(str(log_path), buffer_size=1) as logger:
        logger.log(make_point(0.0))

    assert log_path.exists()

    with open(log_path, "r", newline="") as f:
        rows = list(csv.reader(f))

    # Header + 1 data row
    assert len(rows) == 2
    assert rows[0] == ["t", "position", "velocity", "acceleration"]
    assert float(rows[1][0]) == 0.0
    assert float(rows[1][1]) == pytest.approx(200.0)
    assert float(rows[1][3]) == pytest.approx(-9.81)


def test_logger_buffering(tmp_path):
    """Test that data is buffered and only written when buffer fills or flush is called."""
    log_path = tmp_path / "test_buffer.csv"
    buffer_size = 5

    logger = CSVLogger(str(log_path), buffer_size=buffer_size)

    # 1. Log fewer items than buffer size
    for i in range(buffer_size - 1):
        logger.log(make_point(float(i)))

    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1  # Header only

    # 2. Log one more to trigger flush
    logger.log(make_point(float(buffer_size)))

    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1 + buffer_size  # Header + buffered rows

    logger.close()
    assert logger.rows_logged == buffer_size


def test_logger_custom_fields(tmp_path):
    """Test logging with a restricted set of fields."""
    log_path = tmp_path / "test_custom.csv"

    with CSVLogger(str(log_path), fields=["velocity"]) as logger:
        logger.log(make_point(1.0))

    with open(log_path, "r", newline="") as f:
        rows = list(csv.reader(f))

    assert rows[0] == ["t", "velocity"]
    assert float(rows[1][1]) == pytest.approx(-9.81)


def test_logger_rejects_unknown_fields(tmp_path):
    with pytest.raises(ValueError, match="Invalid fields"):
        CSVLogger(tmp_path / "bad.csv", fields=["position", "jerk"])


def test_logger_creates_parent_directories(tmp_path):
    log_path = tmp_path / "nested" / "logs" / "run.csv"
    with CSVLogger(log_path) as logger:
        logger.log(make_point())
    assert log_path.exists()
