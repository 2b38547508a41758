"""
Exceptions for WorkBooster domain services
"""


class WorkBoosterError(Exception):
    """Base exception for all service errors."""
    pass


class PipelineError(WorkBoosterError):
    """Exception raised when a stage/status combination is invalid."""
    pass


class LeadImportError(WorkBoosterError):
    """Exception raised when an import payload cannot be processed."""
    pass


class StageViewNotFound(WorkBoosterError):
    """Exception raised when a stage view name is unknown."""
    pass


class InvalidSortKey(WorkBoosterError):
    """Exception raised when a stage view is sorted by a column it cannot sort on."""
    pass
