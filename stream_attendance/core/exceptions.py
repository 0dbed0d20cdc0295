class AttendanceError(Exception):
    """Base class for domain errors raised by controllers"""


class AlreadyCheckedInError(AttendanceError):
    def __init__(self, record=None):
        super().__init__("You're already checked in for today")
        self.record = record


class EmptyExportError(AttendanceError):
    def __init__(self):
        super().__init__("No attendance records found for the selected date range")


class RoleLookupError(AttendanceError):
    """The role table could not be queried"""
