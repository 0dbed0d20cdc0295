"""
Integration tests for activity logging.
Verifies that the logging decorators record actions without ever breaking the
operation they wrap.
"""

from unittest.mock import Mock, patch

import pytest
from sqlalchemy.orm import Session

from stream_attendance.core.identity import UnverifiedIdentity
from stream_attendance.core.local_identity import create_local_profile
from stream_attendance.models.profile import Profile
from stream_attendance.models.system_log import SystemLog
from stream_attendance.services.logging_service import LoggingService
from stream_attendance.utils.logging_decorator import log_activity, log_update


class TestFixtures:
    """Test fixtures and mock objects"""

    @pytest.fixture
    def mock_db(self):
        return Mock(spec=Session)

    @pytest.fixture
    def mock_profile(self):
        profile = Mock(spec=Profile)
        profile.id = 1
        profile.full_name = "Test Member"
        profile.email = "test@example.com"
        return profile

    @pytest.fixture
    def guest(self):
        return UnverifiedIdentity(local_profile=create_local_profile("guest@example.com", "Visiting Guest"))


class TestDecorator(TestFixtures):

    @patch('stream_attendance.services.logging_service.LoggingService.log_activity')
    def test_logs_with_session_and_actor(self, mock_log_activity, mock_db, mock_profile):
        @log_update("stream_config", "Updated stream configuration")
        def save(db, editor):
            return Mock(id=7)

        save(mock_db, mock_profile)

        mock_log_activity.assert_called_once()
        kwargs = mock_log_activity.call_args.kwargs
        assert kwargs["action"] == "UPDATE"
        assert kwargs["record_id"] == 7
        assert kwargs["table_name"] == "stream_config"
        assert kwargs["actor"] is mock_profile

    @patch('stream_attendance.services.logging_service.LoggingService.log_activity')
    def test_callable_description(self, mock_log_activity, mock_db, guest):
        @log_activity("CHECK_IN", lambda result, *args, **kwargs: f"Checked in to {result.stream_title}")
        def check_in(db, identity):
            return Mock(id=3, stream_title="Sunday Service")

        check_in(mock_db, identity=guest)

        assert mock_log_activity.call_args.kwargs["description"] == "Checked in to Sunday Service"

    @patch('stream_attendance.services.logging_service.LoggingService.log_activity')
    def test_skips_without_actor(self, mock_log_activity, mock_db):
        @log_activity("CREATE", table_name="attendance")
        def create(db):
            return "done"

        assert create(mock_db) == "done"
        mock_log_activity.assert_not_called()

    @patch('stream_attendance.services.logging_service.LoggingService.log_activity', side_effect=RuntimeError("db down"))
    def test_logging_failure_does_not_break_operation(self, mock_log_activity, mock_db, mock_profile):
        @log_activity("UPDATE", table_name="stream_config")
        def save(db, editor):
            return "saved"

        assert save(mock_db, mock_profile) == "saved"
        mock_db.rollback.assert_called_once()

    @patch('stream_attendance.services.logging_service.LoggingService.log_activity')
    def test_errors_in_operation_are_not_logged(self, mock_log_activity, mock_db, mock_profile):
        @log_activity("UPDATE", table_name="stream_config")
        def save(db, editor):
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            save(mock_db, mock_profile)
        mock_log_activity.assert_not_called()


class TestLoggingService(TestFixtures):

    def test_guest_actor_has_no_id(self, db, guest):
        entry = LoggingService.log_activity(db, guest, "join", "Joined the live service")

        assert entry.actor_id is None
        assert entry.actor_name == "Visiting Guest"
        assert entry.action == "JOIN"

    def test_unknown_actor_type(self, mock_db):
        with pytest.raises(TypeError):
            LoggingService.log_activity(mock_db, object(), "JOIN", "Joined")

    def test_list_logs_filters_by_action(self, db, member, guest):
        LoggingService.log_activity(db, guest, "JOIN", "Joined the live service")
        LoggingService.log_activity(db, member, "CHECK_IN", "Checked in")
        LoggingService.log_activity(db, member, "CHECK_IN", "Checked in again")

        logs, total = LoggingService.list_logs(db, action="check_in", limit=1)

        assert total == 2
        assert len(logs) == 1
        assert isinstance(logs[0], SystemLog)
        assert logs[0].description == "Checked in again"

    def test_action_descriptions(self):
        assert LoggingService.get_action_description("check_in", "attendance") == "Checked in to the live service"
        assert LoggingService.get_action_description("ARCHIVE", "attendance") == "Performed archive on attendance"
