from __future__ import annotations


class EdaWarning(UserWarning):
    """Base class for non-fatal conditions reported by edakit."""


class GradientLengthWarning(EdaWarning):
    """Gradient colors were requested but do not line up with the table rows."""


class IllegalPlotCombinationWarning(EdaWarning):
    """The requested plot type is not available for the given outcome setting."""
