"""Reader for the main section of a JAR ``MANIFEST.MF``."""

from __future__ import annotations

import re

from bunana.errors import ManifestError

MANIFEST_PATH = "META-INF/MANIFEST.MF"
UTF8_BOM = b"\xef\xbb\xbf"
_LINE_BREAK = re.compile(rb"\r\n|\r|\n")


def read_manifest(data: bytes) -> dict[str, str]:
    """Return main-section headers, joining continuation lines.

    Lines end only at CR, LF or CRLF. Continuations are joined as raw bytes and
    each logical header is decoded afterwards, so a multi-byte character split
    across a wrapped line is read intact.
    """
    if data.startswith(UTF8_BOM):
        data = data[len(UTF8_BOM) :]

    logical: list[tuple[int, bytearray]] = []
    for line_number, line in enumerate(_LINE_BREAK.split(data), start=1):
        if not line:
            if not logical:
                continue
            break
        if line.startswith(b" "):
            if not logical:
                raise ManifestError(f"Continuation line {line_number} has no preceding header.")
            logical[-1][1].extend(line[1:])
            continue
        logical.append((line_number, bytearray(line)))

    headers: dict[str, str] = {}
    for line_number, raw in logical:
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestError(
                f"Header on line {line_number} is not valid UTF-8: {exc.reason}"
            ) from exc
        name, separator, value = line.partition(":")
        if not separator or not name or name != name.strip():
            raise ManifestError(f"Invalid manifest line {line_number}: {line!r}")
        if value and not value.startswith(" "):
            raise ManifestError(f"Header {name!r} on line {line_number} must use ': ' separator.")
        headers[name] = value[1:] if value else ""
    return headers
