"""Exceptions raised while building the accessions report."""


class AccessionReportError(Exception):
    """Base class for report failures."""


class ReportValidationError(AccessionReportError, ValueError):
    """Raised when a report parameter cannot be interpreted."""


class ReportConfigurationError(AccessionReportError):
    """Raised when the store or config lacks something the report needs."""
