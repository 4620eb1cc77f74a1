import datetime as _dt

import pytest
from loguru import logger

from config import Config
from plotting import plot_balance_trajectory, plot_future_value_schedule
from projection import ContributionTrack, future_value, project_tracks
from state import derive, derive_future_value
from utils import (
    log_future_value_results,
    log_input_parameters,
    log_projection_results,
    schedule_frame,
    trajectory_frame,
)

TODAY = _dt.date(2026, 1, 15)


@pytest.fixture
def messages():
    captured = []
    handler_id = logger.add(captured.append, format="{message}", level="DEBUG")
    yield captured
    logger.remove(handler_id)


def test_trajectory_frame_ends_at_stop_month():
    track = ContributionTrack(balance=0, contribution_amount=100, annual_rate=0)
    projection = project_tracks([track], 1300, record_trajectory=True)
    frame = trajectory_frame(projection)
    assert list(frame.columns) == ["Year", "Balance"]
    assert frame["Balance"].tolist() == [0.0, 1200.0, 1300.0]
    assert frame["Year"].iloc[-1] == pytest.approx(13 / 12)


def test_trajectory_frame_without_recording_is_empty():
    track = ContributionTrack(balance=0, contribution_amount=100, annual_rate=0)
    assert trajectory_frame(project_tracks([track], 1300)).empty


def test_schedule_frame_splits_growth():
    frame = schedule_frame(future_value(1000, 100, 0.05, 3))
    assert frame["Year"].tolist() == [0, 1, 2, 3]
    assert frame["Growth"].iloc[0] == 0
    assert frame["Growth"].iloc[-1] > 0
    last = frame.iloc[-1]
    assert last["Balance"] == pytest.approx(1000 + last["Contributions"] + last["Growth"])


def test_log_input_parameters(messages):
    log_input_parameters(Config(scenario="Logged", currency="USD", first_name="Tom"))
    text = "\n".join(messages)
    assert "Input Parameters For Scenario: Logged" in text
    assert "First Name: Tom" in text
    assert "Principal: $10,000.00" in text
    assert "Withdrawal Pct: 4.00%" in text


def test_log_projection_results(messages):
    config = Config(first_name="Tom")
    log_projection_results(config, derive(config, today=TODAY))
    text = "\n".join(messages)
    assert "Tom, here is the timeline" in text
    assert "reaching on approximately" in text
    assert "Real Return (Inflation Adjusted): 4.4%" in text


def test_log_projection_results_warns_when_capped(messages):
    config = Config(principal=0, contribution=0, max_years=10)
    log_projection_results(config, derive(config, today=TODAY))
    text = "\n".join(messages)
    assert "more than 10 years" in text
    assert "Target not reached within 10 years" in text


def test_log_future_value_results(messages):
    config = Config(mode="future_value", nominal_return_pct=0, inflation_pct=0, horizon_years=1)
    log_future_value_results(config, derive_future_value(config))
    text = "\n".join(messages)
    assert "Final Balance: A$16,000.00" in text
    assert "Total Growth: A$0.00" in text


def test_plot_balance_trajectory(tmp_path):
    config = Config()
    derived = derive(config, today=TODAY)
    out = tmp_path / "traj.png"
    assert plot_balance_trajectory(trajectory_frame(derived.projection), config, derived, str(out))
    assert out.exists()


def test_plot_balance_trajectory_skips_empty(tmp_path):
    config = Config()
    derived = derive(config, today=TODAY)
    track = ContributionTrack(balance=0)
    empty = trajectory_frame(project_tracks([track], 1))
    out = tmp_path / "none.png"
    assert plot_balance_trajectory(empty, config, derived, str(out)) is False
    assert not out.exists()


def test_plot_future_value_schedule(tmp_path):
    config = Config(mode="future_value", horizon_years=5)
    out = tmp_path / "fv.png"
    assert plot_future_value_schedule(schedule_frame(derive_future_value(config)), config, str(out))
    assert out.exists()
