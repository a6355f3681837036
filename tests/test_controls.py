"""Tests for input snapshots and edge detection."""

from jungle_platformer.controls import InputSnapshot, InputTracker


class TestInputSnapshot:
    def test_defaults(self):
        snapshot = InputSnapshot()
        assert not snapshot.horizontal
        assert not snapshot.any_jump_pressed

    def test_horizontal(self):
        assert InputSnapshot(left=True).horizontal
        assert InputSnapshot(right=True).horizontal

    def test_either_jump_edge(self):
        assert InputSnapshot(up_pressed=True).any_jump_pressed
        assert InputSnapshot(jump_pressed=True).any_jump_pressed


class TestInputTracker:
    def test_rising_edge_only_on_first_frame(self):
        tracker = InputTracker()
        first = tracker.sample(jump=True)
        second = tracker.sample(jump=True)

        assert first.jump and first.jump_pressed
        assert second.jump and not second.jump_pressed

    def test_release_rearms(self):
        tracker = InputTracker()
        tracker.sample(up=True)
        tracker.sample(up=False)
        assert tracker.sample(up=True).up_pressed

    def test_keys_are_independent(self):
        tracker = InputTracker()
        tracker.sample(up=True)
        snapshot = tracker.sample(up=True, jump=True)
        assert not snapshot.up_pressed
        assert snapshot.jump_pressed

    def test_held_keys_have_no_edge(self):
        snapshot = InputTracker().sample(left=True, down=True)
        assert snapshot.left and snapshot.down
        assert not snapshot.any_jump_pressed

    def test_reset(self):
        tracker = InputTracker()
        tracker.sample(jump=True)
        tracker.reset()
        assert tracker.sample(jump=True).jump_pressed
