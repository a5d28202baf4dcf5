"""
Exceptions raised by the export pipeline.
"""


class ExportError(Exception):
    """Export could not produce a document."""
    pass


class ExportWriteError(ExportError):
    """PDF could not be written to its destination."""
    pass
