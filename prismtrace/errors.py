"""Exception types raised by PrismTrace."""


class PrismTraceError(Exception):
    """Base class for all PrismTrace errors."""
    pass


class SceneParseError(PrismTraceError):
    """Error during scene parsing."""
    pass


class SceneFrozenError(PrismTraceError):
    """A frozen scene was modified."""
    pass


class UnknownSceneError(PrismTraceError):
    """No built-in scene with the requested name."""
    pass
