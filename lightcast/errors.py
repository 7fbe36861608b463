"""Input errors reported to the caller.

Only structurally invalid input is raised. Degenerate geometry (zero-length
rays, parallel segments, a light sitting on a vertex) is resolved inside the
engine and never surfaces here.
"""


class VisibilityError(ValueError):
    """Base class for invalid engine input."""


class InvalidStrip(VisibilityError):
    """A strip cannot be built from the given segments."""


class EmptyScene(VisibilityError):
    """No strips were given to trace against."""
