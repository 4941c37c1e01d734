"""
Export error taxonomy.

Configuration errors are raised while an action is being defined and
propagate to the integrator.  Everything else is raised while an export
runs and is converted into a danger response at the pipeline boundary.
"""


class ExportError(Exception):
    """Base class for every error raised by this package."""


# ── Configuration time ───────────────────────────────────────────

class ConfigurationError(ExportError):
    """The export action is configured inconsistently with the schema."""


class ColumnNotFoundError(ConfigurationError):
    """A configured column does not exist in the exported table."""


class RangeColumnNotDateError(ConfigurationError):
    """The date-range column is not declared with a temporal type."""


class DiskNotConfiguredError(ConfigurationError):
    """A storage disk name has no registered backend."""


# ── Run time ─────────────────────────────────────────────────────

class EmptyResultError(ExportError):
    """The export query matches no rows."""


class InvalidFieldsError(ExportError):
    """The action field bag holds values that cannot be parsed."""


class ColumnSelectionParseError(InvalidFieldsError):
    """The user column selection is malformed or names unknown columns."""


class EmptyColumnSelectionError(ExportError):
    """Column resolution left nothing to export."""


class SerializationError(ExportError):
    """The spreadsheet could not be written."""


class StorageError(ExportError):
    """A storage backend failed to read, write or move a file."""
