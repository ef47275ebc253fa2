"""
Error kinds raised by the SnapBook imaging core.

All errors derive from ``SnapbookError`` (a ``ValueError``) so callers that
already guard image operations with ``except ValueError`` keep working.
"""


class SnapbookError(ValueError):
    """Base class for imaging core failures."""


class FormatError(SnapbookError):
    """A sensor frame is malformed or incomplete (e.g. fewer than three planes)."""


class EmptyInputError(SnapbookError):
    """The strip compositor was given no shots."""


class BoundsError(SnapbookError):
    """A geometric value is outside its valid range (e.g. a non-positive scale)."""


class UnknownFilterError(SnapbookError):
    """Declared for completeness; filter lookups degrade to ``FilterKind.NONE`` instead."""
