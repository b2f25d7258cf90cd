"""Tests for the greedy placement loop.

Covers the scheduling properties every run must satisfy (no overlap, deadline
compliance, duration fidelity, determinism) and the reference scenarios.
"""

import pytest
from datetime import timedelta
from itertools import combinations

from meetingscheduler.engine.optimizer import OptimizationResult, aggregate_score, optimize
from meetingscheduler.engine.slot_finder import intervals_overlap
from meetingscheduler.engine.trace import OptimizationTrace, TraceEventKind


def _at(now, hour, minute=0):
    return now.replace(hour=hour, minute=minute)


@pytest.fixture
def busy_week(make_meeting, make_window, now):
    """A crowded set of meetings over three short windows."""
    meetings = [
        make_meeting(title="Board review", priority=9, duration_minutes=90, deadline=now + timedelta(days=2)),
        make_meeting(title="1:1", priority=6, duration_minutes=30, deadline=now + timedelta(hours=10)),
        make_meeting(title="Budget", priority=8, duration_minutes=120, deadline=now + timedelta(days=1, hours=6)),
        make_meeting(title="Standup", priority=4, duration_minutes=15, deadline=now + timedelta(hours=4)),
        make_meeting(title="Offsite planning", priority=3, duration_minutes=240, deadline=now + timedelta(days=5)),
        make_meeting(title="Vendor call", priority=5, duration_minutes=45, deadline=now + timedelta(days=1)),
        make_meeting(title="Hiring sync", priority=7, duration_minutes=60, deadline=None),
    ]
    windows = [
        make_window(_at(now, 9), _at(now, 12)),
        make_window(_at(now, 13), _at(now, 15)),
        make_window(_at(now, 9) + timedelta(days=1), _at(now, 11) + timedelta(days=1)),
        # Overlaps the first window on purpose.
        make_window(_at(now, 11), _at(now, 14)),
    ]
    return meetings, windows


class TestOptimizeProperties:
    """Invariants that hold for every optimization result."""

    def test_no_two_placements_overlap(self, busy_week, now):
        meetings, windows = busy_week
        result = optimize(meetings, windows, now=now)

        assert result.placements
        for a, b in combinations(result.placements, 2):
            assert not intervals_overlap(a.start_time, a.end_time, b.start_time, b.end_time)

    def test_placements_meet_deadlines(self, busy_week, now):
        meetings, windows = busy_week
        result = optimize(meetings, windows, now=now)

        for p in result.placements:
            if p.meeting.deadline is not None:
                assert p.end_time <= p.meeting.deadline

    def test_placements_keep_duration(self, busy_week, now):
        meetings, windows = busy_week
        result = optimize(meetings, windows, now=now)

        for p in result.placements:
            assert p.end_time - p.start_time == timedelta(minutes=p.meeting.duration_minutes)

    def test_placements_lie_inside_a_window(self, busy_week, now):
        meetings, windows = busy_week
        result = optimize(meetings, windows, now=now)

        for p in result.placements:
            assert any(w.start_time <= p.start_time and p.end_time <= w.end_time for w in windows)

    def test_every_meeting_is_placed_or_unscheduled_exactly_once(self, busy_week, now):
        meetings, windows = busy_week
        result = optimize(meetings, windows, now=now)

        placed = [p.meeting.id for p in result.placements]
        unscheduled = [m.id for m in result.unscheduled_meetings]
        assert len(placed) == len(set(placed))
        assert sorted(placed + unscheduled) == sorted(m.id for m in meetings)

    def test_deterministic(self, busy_week, now):
        meetings, windows = busy_week

        def snapshot(result: OptimizationResult):
            return (
                [(p.meeting.id, p.start_time, p.end_time, p.score) for p in result.placements],
                [m.id for m in result.unscheduled_meetings],
                result.optimization_score,
            )

        assert snapshot(optimize(meetings, windows, now=now)) == snapshot(optimize(meetings, windows, now=now))

    def test_input_meeting_order_does_not_matter(self, busy_week, now):
        meetings, windows = busy_week

        forward = optimize(meetings, windows, now=now)
        backward = optimize(list(reversed(meetings)), windows, now=now)

        assert [(p.meeting.id, p.start_time) for p in forward.placements] == \
            [(p.meeting.id, p.start_time) for p in backward.placements]

    def test_aggregate_is_mean_of_placement_scores(self, busy_week, now):
        meetings, windows = busy_week
        result = optimize(meetings, windows, now=now)

        expected = sum(p.score for p in result.placements) / len(result.placements)
        assert result.optimization_score == pytest.approx(expected)

    def test_reference_time_is_recorded(self, busy_week, now):
        meetings, windows = busy_week
        assert optimize(meetings, windows, now=now).reference_time == now

    def test_inputs_are_not_mutated(self, busy_week, now):
        meetings, windows = busy_week
        meetings_before = [m.model_copy() for m in meetings]
        windows_before = list(windows)

        optimize(meetings, windows, now=now)

        assert meetings == meetings_before
        assert windows == windows_before


class TestOptimizeScenarios:
    """Reference scenarios."""

    def test_single_meeting_lands_at_end_of_window(self, make_meeting, workday_window, now):
        """Window 09:00-17:00, deadline 23:59 the same day: the latest start (16:00) wins."""
        meeting = make_meeting(priority=10, duration_minutes=60, deadline=_at(now, 23, 59))

        result = optimize([meeting], [workday_window], now=now)

        assert len(result.placements) == 1
        placement = result.placements[0]
        assert placement.start_time == _at(now, 16)
        assert placement.end_time == _at(now, 17)
        assert result.optimization_score == pytest.approx(placement.score)

    def test_higher_priority_wins_single_slot(self, make_meeting, make_window, now):
        window = make_window(_at(now, 9), _at(now, 10))
        high = make_meeting(title="High", priority=8, duration_minutes=60)
        low = make_meeting(title="Low", priority=3, duration_minutes=60)

        result = optimize([low, high], [window], now=now)

        assert [p.meeting.id for p in result.placements] == [high.id]
        assert [m.id for m in result.unscheduled_meetings] == [low.id]

    def test_identical_except_priority(self, make_meeting, make_window, now):
        """Monotone priority pressure: only the higher-priority twin fits."""
        window = make_window(_at(now, 14), _at(now, 15, 30))
        base = {"duration_minutes": 60, "deadline": _at(now, 18)}
        twins = [make_meeting(priority=p, **base) for p in (4, 5)]

        result = optimize(twins, [window], now=now)

        assert len(result.placements) == 1
        assert result.placements[0].meeting.priority == 5

    def test_meeting_longer_than_every_window(self, make_meeting, make_window, now):
        windows = [make_window(_at(now, 9), _at(now, 10)), make_window(_at(now, 13), _at(now, 15))]
        meeting = make_meeting(duration_minutes=180)

        result = optimize([meeting], windows, now=now)

        assert result.placements == []
        assert result.unscheduled_meetings == [meeting]
        assert result.optimization_score == 0.0

    def test_later_meeting_works_around_earlier_commitment(self, make_meeting, workday_window, now):
        first = make_meeting(title="First", priority=9, duration_minutes=60, deadline=_at(now, 23, 59))
        second = make_meeting(title="Second", priority=2, duration_minutes=60, deadline=_at(now, 23, 59))

        result = optimize([second, first], [workday_window], now=now)

        by_id = {p.meeting.id: p for p in result.placements}
        assert by_id[first.id].start_time == _at(now, 16)
        assert by_id[second.id].start_time == _at(now, 15)
        assert [p.meeting.id for p in result.placements] == [first.id, second.id]

    def test_unplaceable_meeting_does_not_block_others(self, make_meeting, workday_window, now):
        impossible = make_meeting(title="Impossible", priority=10, duration_minutes=600)
        easy = make_meeting(title="Easy", priority=1, duration_minutes=30)

        result = optimize([impossible, easy], [workday_window], now=now)

        assert [p.meeting.id for p in result.placements] == [easy.id]
        assert [m.id for m in result.unscheduled_meetings] == [impossible.id]

    def test_non_positive_duration_is_reported_unscheduled(self, make_meeting, workday_window, now):
        broken = make_meeting(duration_minutes=0)
        result = optimize([broken], [workday_window], now=now)
        assert result.unscheduled_meetings == [broken]


class TestEmptyInputs:
    """Empty inputs produce an empty result, never an error."""

    def test_no_meetings(self, workday_window, now):
        result = optimize([], [workday_window], now=now)
        assert result.placements == []
        assert result.unscheduled_meetings == []
        assert result.optimization_score == 0.0

    def test_no_windows(self, make_meeting, now):
        meetings = [make_meeting(), make_meeting()]
        result = optimize(meetings, [], now=now)
        assert result.placements == []
        assert result.unscheduled_meetings == meetings
        assert result.optimization_score == 0.0

    def test_aggregate_score_of_nothing(self):
        assert aggregate_score([]) == 0.0

    def test_defaults_now_to_wall_clock(self):
        result = optimize([], [])
        assert result.reference_time is not None


class TestTrace:
    """Trace output observes the run without changing it."""

    def test_trace_does_not_change_result(self, busy_week, now):
        meetings, windows = busy_week

        plain = optimize(meetings, windows, now=now)
        traced = optimize(meetings, windows, now=now, trace=OptimizationTrace())

        assert [(p.meeting.id, p.start_time) for p in plain.placements] == \
            [(p.meeting.id, p.start_time) for p in traced.placements]

    def test_trace_summarizes_run(self, busy_week, now):
        meetings, windows = busy_week
        trace = OptimizationTrace()

        result = optimize(meetings, windows, now=now, trace=trace)

        assert result.trace is trace
        assert len(trace.of_kind(TraceEventKind.MEETING_RANKED)) == len(meetings)
        placed = trace.of_kind(TraceEventKind.MEETING_PLACED)
        assert [e.meeting_id for e in placed] == [p.meeting.id for p in result.placements]
        assert [e.score for e in placed] == [p.score for p in result.placements]
        unscheduled = trace.of_kind(TraceEventKind.MEETING_UNSCHEDULED)
        assert [e.meeting_id for e in unscheduled] == [m.id for m in result.unscheduled_meetings]

    def test_no_trace_by_default(self, busy_week, now):
        meetings, windows = busy_week
        assert optimize(meetings, windows, now=now).trace is None
