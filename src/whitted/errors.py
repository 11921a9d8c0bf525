"""Exceptions raised while building a scene.

Only host-side scene construction raises. Taichi functions resolve every
numeric edge case (misses, parallel rays, total internal reflection,
unconfigured lights) to a zero-valued result instead.
"""


class SceneConfigurationError(ValueError):
    """A scene cannot be rendered as configured (e.g. a zero plane normal)."""


class SceneParseError(SceneConfigurationError):
    """A scene-file line could not be parsed.

    Attributes:
        path: The scene file being read.
        line_number: 1-based line number of the offending line.
    """

    def __init__(self, message: str, path: str = "<string>", line_number: int = 0) -> None:
        super().__init__(f"{path}:{line_number}: {message}")
        self.path = path
        self.line_number = line_number
