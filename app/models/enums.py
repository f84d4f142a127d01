from enum import Enum


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class PaymentType(str, Enum):
    CASH = "cash"
    ONLINE = "online"


class StatusFilter(str, Enum):
    """Status filter of the payments table"""
    ALL = "all"
    PAID = "paid"
    PENDING = "pending"


class Month(str, Enum):
    JANUARY = "January"
    FEBRUARY = "February"
    MARCH = "March"
    APRIL = "April"
    MAY = "May"
    JUNE = "June"
    JULY = "July"
    AUGUST = "August"
    SEPTEMBER = "September"
    OCTOBER = "October"
    NOVEMBER = "November"
    DECEMBER = "December"


class AlertType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class AlertPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
