from daybreak.scheduler import FrameScheduler


# ===========================================================================
# Frame requests
# ===========================================================================

class TestFrameRequests:
    def test_runs_once_on_next_frame_with_timestamp(self):
        sched = FrameScheduler()
        seen = []
        sched.request_frame(seen.append)

        sched.run_frame(16.0)
        sched.run_frame(32.0)

        assert seen == [16.0]
        assert sched.pending_frames == 0

    def test_request_made_during_a_frame_runs_on_the_next(self):
        sched = FrameScheduler()
        seen = []

        def first(now):
            seen.append(("first", now))
            sched.request_frame(lambda t: seen.append(("second", t)))

        sched.request_frame(first)
        sched.run_frame(1.0)
        assert seen == [("first", 1.0)]

        sched.run_frame(2.0)
        assert seen == [("first", 1.0), ("second", 2.0)]

    def test_cancel_before_frame(self):
        sched = FrameScheduler()
        seen = []
        token = sched.request_frame(seen.append)

        assert sched.cancel(token) is True
        sched.run_frame(1.0)

        assert seen == []
        assert sched.cancel(token) is False

    def test_cancel_mid_frame_skips_remaining_callbacks(self):
        sched = FrameScheduler()
        seen = []
        tokens = []

        def canceller(now):
            seen.append("canceller")
            for token in tokens:
                sched.cancel(token)

        sched.request_frame(canceller)
        tokens.append(sched.request_frame(lambda now: seen.append("victim")))
        sched.run_frame(1.0)

        assert seen == ["canceller"]
        assert sched.pending_frames == 0

    def test_callbacks_run_in_request_order(self):
        sched = FrameScheduler()
        seen = []
        for i in range(5):
            sched.request_frame(lambda now, i=i: seen.append(i))
        sched.run_frame(0.0)
        assert seen == [0, 1, 2, 3, 4]


# ===========================================================================
# Timers
# ===========================================================================

class TestTimers:
    def test_fires_when_due(self):
        sched = FrameScheduler()
        fired = []
        sched.call_later(100, lambda: fired.append("x"))

        sched.run_frame(99.0)
        assert fired == []
        assert sched.pending_timers == 1

        sched.run_frame(100.0)
        assert fired == ["x"]
        assert sched.pending_timers == 0

    def test_delay_is_relative_to_current_time(self):
        sched = FrameScheduler()
        fired = []
        sched.run_frame(1000.0)
        sched.call_later(50, lambda: fired.append(sched.now_ms))

        sched.run_frame(1040.0)
        sched.run_frame(1060.0)
        assert fired == [1060.0]

    def test_cancelled_timer_never_fires(self):
        sched = FrameScheduler()
        fired = []
        token = sched.call_later(10, lambda: fired.append("x"))

        assert sched.is_pending(token)
        sched.cancel(token)
        sched.run_frame(500.0)

        assert fired == []
        assert not sched.is_pending(token)

    def test_due_timers_fire_in_time_order(self):
        sched = FrameScheduler()
        fired = []
        sched.call_later(30, lambda: fired.append(30))
        sched.call_later(10, lambda: fired.append(10))
        sched.call_later(20, lambda: fired.append(20))

        sched.run_frame(100.0)
        assert fired == [10, 20, 30]

    def test_clear_drops_everything(self):
        sched = FrameScheduler()
        sched.call_later(10, lambda: None)
        sched.request_frame(lambda now: None)
        sched.clear()
        assert sched.pending_frames == 0
        assert sched.pending_timers == 0
