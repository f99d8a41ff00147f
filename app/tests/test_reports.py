"""
Tests for the daily run report.
"""
import uuid
from datetime import date, datetime, timedelta

from app.models.run import TrainRun
from app.services.reports import ReportGenerator, compute_duration
from app.services.validator import validate_train

DAY = date(2024, 5, 18)
MORNING = datetime(2024, 5, 18, 9, 0, 0)


def add_run(store, fields, start, stop=None, train_id=None):
    run = TrainRun(
        id=str(uuid.uuid4()),
        train_id=train_id or str(uuid.uuid4()),
        start_time=start,
        stop_time=stop,
        **validate_train(fields),
    )
    store.add_run(run)
    return run


class TestComputeDuration:
    """Test cases for duration arithmetic."""

    def test_ninety_five_minutes(self):
        duration = compute_duration(MORNING, MORNING + timedelta(minutes=95))

        assert duration.minutes == 95
        assert duration.hours == 1
        assert duration.remainder_minutes == 35

    def test_rounds_half_minutes_up(self):
        assert compute_duration(MORNING, MORNING + timedelta(seconds=90)).minutes == 2
        assert compute_duration(MORNING, MORNING + timedelta(seconds=89)).minutes == 1

    def test_never_negative(self):
        duration = compute_duration(MORNING, MORNING - timedelta(minutes=3))

        assert duration.minutes == 0
        assert duration.hours == 0
        assert duration.remainder_minutes == 0

    def test_serialized_with_wire_names(self):
        data = compute_duration(MORNING, MORNING + timedelta(minutes=61)).model_dump(by_alias=True)

        assert data == {"minutes": 61, "hours": 1, "remainderMinutes": 1}


class TestRunsForDate:
    """Test cases for ReportGenerator.runs_for_date."""

    def test_only_runs_started_that_day_in_order(self, store, clock, sample_trains):
        with store.transaction():
            late = add_run(store, sample_trains[1], MORNING + timedelta(hours=5), MORNING + timedelta(hours=6))
            early = add_run(store, sample_trains[0], MORNING, MORNING + timedelta(minutes=95))
            add_run(store, sample_trains[2], MORNING - timedelta(days=1), MORNING)
            add_run(store, sample_trains[2], datetime(2024, 5, 19, 0, 0, 0))

        reports = ReportGenerator(store, clock=clock).runs_for_date(DAY)

        assert [report.train_id for report in reports] == [early.train_id, late.train_id]
        first = reports[0]
        assert first.name == "Flying Scotsman"
        assert first.owner == "Margaret"
        assert first.duration.minutes == 95
        assert first.duration.hours == 1
        assert first.duration.remainder_minutes == 35

    def test_open_run_measured_against_now(self, store, clock, sample_train):
        with store.transaction():
            add_run(store, sample_train, MORNING)
        clock.now = MORNING + timedelta(minutes=30)
        generator = ReportGenerator(store, clock=clock)

        first = generator.runs_for_date(DAY)[0]
        clock.advance(minutes=15)
        second = generator.runs_for_date(DAY)[0]

        assert first.stop_time is None
        assert first.duration.minutes == 30
        assert second.duration.minutes == 45

    def test_open_run_started_after_now_clamps_to_zero(self, store, clock, sample_train):
        with store.transaction():
            add_run(store, sample_train, MORNING + timedelta(hours=3))
        clock.now = MORNING

        report = ReportGenerator(store, clock=clock).runs_for_date(DAY)[0]

        assert report.duration.minutes == 0

    def test_empty_day(self, store, clock):
        assert ReportGenerator(store, clock=clock).runs_for_date(DAY) == []

    def test_report_json_uses_wire_names(self, store, clock, sample_train):
        with store.transaction():
            add_run(store, sample_train, MORNING, MORNING + timedelta(minutes=10))

        data = ReportGenerator(store, clock=clock).runs_for_date(DAY)[0].model_dump(mode="json", by_alias=True)

        assert data["trainType"] == "Passenger"
        assert data["powerType"] == "DC"
        assert data["start_time"] == "2024-05-18T09:00:00Z"
        assert data["stop_time"] == "2024-05-18T09:10:00Z"
        assert data["duration"] == {"minutes": 10, "hours": 0, "remainderMinutes": 10}
