"""
Domain Errors Module

Exceptions raised by the fiscal calendar engine and the production data layer.
"""


# ==============================================================================
# Calendar Errors
# ==============================================================================
class CalendarError(Exception):
    """Base exception for fiscal calendar errors."""
    pass


class InvalidRangeError(CalendarError):
    """Raised when a date range starts after it ends."""

    def __init__(self, start, end, message: str = None):
        self.start = start
        self.end = end
        self.message = message or f"Khoảng ngày không hợp lệ: {start} nằm sau {end}"
        super().__init__(self.message)


class InternalConsistencyError(CalendarError):
    """
    Raised when the computed weeks of a fiscal month do not cover a date
    that belongs to that month.

    This indicates a defect in the boundary arithmetic and is never a
    recoverable condition.
    """
    pass


# ==============================================================================
# Production Data Errors
# ==============================================================================
class ProductionDataError(Exception):
    """Base exception for quota and production record errors."""
    pass


class DuplicateStageCodeError(ProductionDataError):
    """Raised when a quota would reuse an existing stage code."""

    def __init__(self, stage_code: str, message: str = None):
        self.stage_code = stage_code
        self.message = message or f"Mã công đoạn '{stage_code}' đã tồn tại."
        super().__init__(self.message)


class RecordNotFoundError(ProductionDataError):
    """Raised when an update targets a record id that is not stored."""

    def __init__(self, record_id: str, message: str = None):
        self.record_id = record_id
        self.message = message or f"Không tìm thấy bản ghi với ID: {record_id}"
        super().__init__(self.message)
