from unittest.mock import patch

from rxsync.logging.logger import Log
from rxsync.notifications.log_notifier import LogNotifier
from rxsync.notifications.models import Notification, NotificationKind


class TestLogNotifier:
    def test_keeps_history_in_order(self) -> None:
        notifier = LogNotifier()

        notifier.notify(NotificationKind.INFO, "Documents Added", "1 file(s)")
        notifier.notify(NotificationKind.ERROR, "Processing Failed", "boom")

        assert notifier.history == [
            Notification(NotificationKind.INFO, "Documents Added", "1 file(s)"),
            Notification(NotificationKind.ERROR, "Processing Failed", "boom"),
        ]

    def test_errors_are_logged_as_errors(self) -> None:
        notifier = LogNotifier()
        with (
            patch("rxsync.notifications.log_notifier.Log.error") as mock_error,
            patch("rxsync.notifications.log_notifier.Log.info") as mock_info,
        ):
            notifier.notify(NotificationKind.ERROR, "Processing Failed", "boom")

        mock_error.assert_called_once_with("Processing Failed: boom")
        mock_info.assert_not_called()

    def test_success_is_logged_as_info(self) -> None:
        notifier = LogNotifier()
        with patch("rxsync.notifications.log_notifier.Log.info") as mock_info:
            notifier.notify(NotificationKind.SUCCESS, "Extraction Successful", "done")

        mock_info.assert_called_once_with("Extraction Successful: done")


class TestLogRendering:
    def test_context_is_appended(self) -> None:
        assert Log._render("Extracted", {"chars": 12}) == "Extracted [chars=12]"

    def test_plain_message_unchanged(self) -> None:
        assert Log._render("Hello", {}) == "Hello"
