"""
Custom Exceptions for the Hotel Booking Service

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    FOREIGN_KEY_VIOLATION = "FOREIGN_KEY_VIOLATION"

    # Business logic errors
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"

    # Lookup specific errors
    HOTEL_NOT_FOUND = "HOTEL_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_TYPE_NOT_FOUND = "ROOM_TYPE_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


# ========================================
# Resource Not Found Exceptions
# ========================================

class HotelNotFoundError(ResourceNotFoundError):
    """Exception raised when a hotel is not found"""

    def __init__(self, hotel_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Hotel", hotel_id, message)
        self.error_code = ErrorCode.HOTEL_NOT_FOUND


class RoomNotFoundError(ResourceNotFoundError):
    """Exception raised when a room is not found"""

    def __init__(self, room_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Room", room_id, message)
        self.error_code = ErrorCode.ROOM_NOT_FOUND


class RoomTypeNotFoundError(ResourceNotFoundError):
    """Exception raised when a room type is not found"""

    def __init__(self, room_type_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Room type", room_type_id, message)
        self.error_code = ErrorCode.ROOM_TYPE_NOT_FOUND


class BookingNotFoundError(ResourceNotFoundError):
    """Exception raised when a booking is not found"""

    def __init__(self, booking_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Booking", booking_id, message)
        self.error_code = ErrorCode.BOOKING_NOT_FOUND


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, error_code, details, status_code)


class DuplicateEntryError(DatabaseError):
    """Exception raised when a unique constraint rejects an insert"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        field: Optional[str] = None,
        table: Optional[str] = None
    ):
        super().__init__(message, table=table, error_code=ErrorCode.DUPLICATE_ENTRY, status_code=409)
        self.details["field"] = field


class ForeignKeyViolationError(DatabaseError):
    """Exception raised when foreign key constraint is violated"""

    def __init__(self, message: str = "Foreign key constraint violation"):
        super().__init__(message, error_code=ErrorCode.FOREIGN_KEY_VIOLATION, status_code=409)


class OverlapConstraintError(DatabaseError):
    """Exception raised when the room overlap exclusion constraint fires"""

    def __init__(self, message: str = "Overlapping booking rejected by database"):
        super().__init__(message, table="bookings", error_code=ErrorCode.BOOKING_CONFLICT, status_code=409)


# ========================================
# Business Logic Exceptions
# ========================================

class BookingError(BaseAppException):
    """Base class for booking-related exceptions"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        booking_id: Optional[str] = None,
        room_id: Optional[str] = None,
        status_code: int = 400
    ):
        details = {
            "booking_id": booking_id,
            "room_id": room_id
        }
        super().__init__(message, error_code, details, status_code)


class BookingConflictError(BookingError):
    """Exception raised when booking conflicts with existing bookings"""

    def __init__(
        self,
        message: str = "Booking conflict detected",
        room_id: Optional[str] = None,
        conflicting_booking_id: Optional[str] = None
    ):
        super().__init__(
            message,
            ErrorCode.BOOKING_CONFLICT,
            room_id=room_id,
            status_code=409
        )
        self.details["conflicting_booking_id"] = conflicting_booking_id


class RoomUnavailableError(BookingError):
    """Exception raised when room is not available for booking"""

    def __init__(
        self,
        message: str = "Room is not available",
        room_id: Optional[str] = None,
        reason: Optional[str] = None
    ):
        super().__init__(
            message,
            ErrorCode.ROOM_UNAVAILABLE,
            room_id=room_id,
            status_code=409
        )
        if reason:
            self.details["reason"] = reason


class InvalidStatusTransitionError(BookingError):
    """Exception raised when a booking cannot move to the requested status"""

    def __init__(
        self,
        current_status: str,
        requested_status: str,
        booking_id: Optional[str] = None
    ):
        super().__init__(
            f"Cannot change booking status from '{current_status}' to '{requested_status}'",
            ErrorCode.INVALID_STATUS_TRANSITION,
            booking_id=booking_id,
            status_code=409
        )
        self.details.update({
            "current_status": current_status,
            "requested_status": requested_status,
        })


class InsufficientCapacityError(BaseAppException):
    """Exception raised when the party does not fit the room type"""

    def __init__(
        self,
        message: str = "Insufficient capacity",
        requested: Optional[int] = None,
        available: Optional[int] = None
    ):
        details = {
            "requested": requested,
            "available": available
        }
        super().__init__(message, ErrorCode.INSUFFICIENT_CAPACITY, details, 422)


class InvalidDateRangeError(BaseAppException):
    """Exception raised when a stay interval is missing, unparsable or empty"""

    def __init__(
        self,
        message: str = "Invalid date range",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ):
        details = {
            "start_date": start_date,
            "end_date": end_date
        }
        super().__init__(message, ErrorCode.INVALID_DATE_RANGE, details, 422)


# Domain vocabulary used by the availability and pricing services
InvalidInterval = InvalidDateRangeError
NotFound = ResourceNotFoundError
UniqueConstraintViolation = DuplicateEntryError


# ========================================
# Utility Functions
# ========================================

OVERLAP_CONSTRAINT_NAME = "ex_bookings_room_no_overlap"


def handle_database_exception(exc: Exception) -> BaseAppException:
    """Convert database exceptions to application exceptions"""
    # Driver message only; the wrapped SQL text would mention every column
    error_message = str(getattr(exc, "orig", None) or exc)
    lowered = error_message.lower()

    if OVERLAP_CONSTRAINT_NAME in lowered or "exclusion constraint" in lowered:
        return OverlapConstraintError(f"Overlapping booking: {error_message}")
    elif "duplicate" in lowered or "unique constraint" in lowered:
        field = "booking_reference" if "booking_reference" in lowered else None
        return DuplicateEntryError(f"Duplicate entry: {error_message}", field=field)
    elif "foreign key" in lowered:
        return ForeignKeyViolationError(f"Foreign key violation: {error_message}")
    else:
        return DatabaseError(f"Database error: {error_message}")


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'HotelNotFoundError',
    'RoomNotFoundError',
    'RoomTypeNotFoundError',
    'BookingNotFoundError',
    'DatabaseError',
    'DuplicateEntryError',
    'ForeignKeyViolationError',
    'OverlapConstraintError',
    'BookingError',
    'BookingConflictError',
    'RoomUnavailableError',
    'InvalidStatusTransitionError',
    'InsufficientCapacityError',
    'InvalidDateRangeError',
    'InvalidInterval',
    'NotFound',
    'UniqueConstraintViolation',
    'OVERLAP_CONSTRAINT_NAME',
    'handle_database_exception',
]
