"""
goutline.source — Source resolution.

Produces the raw bytes of the file to outline, either from disk or from an
overlay archive of unsaved editor buffers read from standard input.

Overlay archive format (repeated until end of input):

    <path>\\n
    <decimal byte length>\\n
    <exactly that many content bytes>

The whole archive is parsed into a mapping before any lookup happens, so a
malformed archive (OverlayCorrupt) is always told apart from a well-formed
archive that lacks the requested path (OverlayMiss).
"""
import os
import sys
from pathlib import Path
from typing import BinaryIO

from goutline.config import log
from goutline.errors import OverlayCorrupt, OverlayMiss, SourceUnavailable

MAX_ENTRY_SIZE = (1 << 32) - 1


def normalize_overlay_path(path: str) -> str:
    """Canonical key for overlay lookups (``./a//b.go`` and ``a/b.go`` match)."""
    return os.path.normpath(path.strip())


def parse_overlay_archive(data: bytes) -> dict[str, bytes]:
    """
    Parse a complete overlay archive.

    Returns:
        Mapping of normalized path to file contents. A path that appears
        more than once keeps its last contents.

    Raises:
        OverlayCorrupt: truncated record, bad size line, or short content.
    """
    overlay: dict[str, bytes] = {}
    pos = 0
    end = len(data)

    while pos < end:
        newline = data.find(b"\n", pos)
        if newline < 0:
            raise OverlayCorrupt("reading archive file name: unexpected end of input")
        filename = normalize_overlay_path(data[pos:newline].decode("utf-8", "surrogateescape"))
        pos = newline + 1

        newline = data.find(b"\n", pos)
        if newline < 0:
            raise OverlayCorrupt(f"reading size of archive file {filename}: unexpected end of input")
        raw_size = data[pos:newline].strip()
        if not raw_size.isdigit():
            raise OverlayCorrupt(
                f"parsing size of archive file {filename}: invalid size {raw_size.decode('utf-8', 'replace')!r}"
            )
        size = int(raw_size)
        if size > MAX_ENTRY_SIZE:
            raise OverlayCorrupt(f"parsing size of archive file {filename}: size {size} out of range")
        pos = newline + 1

        if end - pos < size:
            raise OverlayCorrupt(
                f"reading archive file {filename}: expected {size} bytes, got {end - pos}"
            )
        overlay[filename] = data[pos:pos + size]
        pos += size

    return overlay


def read_overlay_archive(stream: BinaryIO) -> dict[str, bytes]:
    """Read a stream to completion and parse it as an overlay archive."""
    data = stream.read()
    log(f"read {len(data)} byte overlay archive")
    return parse_overlay_archive(data)


def resolve_source(path: str, use_overlay: bool = False, stdin: BinaryIO | None = None) -> bytes:
    """
    Return the current contents of ``path``.

    With ``use_overlay`` the contents come exclusively from the overlay
    archive on ``stdin`` (defaults to the process's standard input); a path
    missing from the archive is an error, never a disk read.
    """
    if use_overlay:
        stream = stdin if stdin is not None else sys.stdin.buffer
        overlay = read_overlay_archive(stream)
        key = normalize_overlay_path(path)
        if key not in overlay:
            raise OverlayMiss(path)
        log(f"using overlay contents for {path} ({len(overlay[key])} bytes)")
        return overlay[key]

    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise SourceUnavailable(path, e.strerror or str(e)) from e
