"""
goutline.errors — Failure taxonomy.

Every error is fatal: the CLI reports it as ``error: <message>`` and exits
non-zero without printing a partial outline.
"""


class GoutlineError(Exception):
    """Base class for every failure goutline reports."""


class SourceUnavailable(GoutlineError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"could not read {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class OverlayMiss(GoutlineError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"couldn't find {path} in archive")


class OverlayCorrupt(GoutlineError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"failed to parse -modified archive: {reason}")


class ParseFailure(GoutlineError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"could not parse file {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RenderError(GoutlineError):
    """Receiver type could not be rendered back to source text."""

    def __init__(self, node_type: str, position: int):
        self.node_type = node_type
        self.position = position
        super().__init__(
            f"failed to parse receiver type: cannot render {node_type} @ {position}"
        )


class UnknownSpec(GoutlineError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown token type: {kind}")


class UnknownDeclaration(GoutlineError):
    def __init__(self, position: int, node_type: str = ""):
        self.position = position
        self.node_type = node_type
        message = f"unknown declaration @ {position}"
        if node_type:
            message += f" ({node_type})"
        super().__init__(message)
