"""
Soft Enable Errors
"""


class SoftEnableError(Exception):
    """Base class for soft enable errors"""


class DetachedRecordError(SoftEnableError):
    """Raised when a record must be saved but belongs to no session"""


class NotEnableableError(SoftEnableError, TypeError):
    """Raised when an enablement extension targets a model without EnableMixin"""
