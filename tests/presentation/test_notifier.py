"""Tests for transient toast notifications."""

from storefront_app.presentation.notifier import ToastNotifier


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestToastNotifier:
    """Test ToastNotifier visibility window."""

    def setup_method(self):
        self.clock = FakeClock()
        self.toast = ToastNotifier(visible_seconds=3.2, clock=self.clock)

    def test_nothing_shown_initially(self):
        assert self.toast.visible is False
        assert self.toast.current is None

    def test_message_visible_for_fixed_duration(self):
        """A message is visible for exactly the configured window."""
        self.toast.show("Course A unlocked. Terabox download ready!")

        self.clock.now += 3.1
        assert self.toast.current == "Course A unlocked. Terabox download ready!"

        self.clock.now += 0.2
        assert self.toast.visible is False

    def test_new_message_restarts_window(self):
        """Showing a second message replaces the first and restarts the timer."""
        self.toast.show("first")
        self.clock.now += 3.0
        self.toast.show("second")
        self.clock.now += 3.0

        assert self.toast.current == "second"
        assert self.toast.history == ["first", "second"]
