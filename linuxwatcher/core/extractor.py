"""Field extraction from the kernel Makefile header.

The Makefile opens with assignments of the form::

    VERSION = 6
    PATCHLEVEL = 12
    SUBLEVEL = 0
    EXTRAVERSION = -rc3
    NAME = Baby Opossum Posse

Only the first few hundred bytes are fetched, so the last line of the text
is usually cut short. Lines without a terminating newline never yield a value.
"""

import logging

from packaging.version import Version, InvalidVersion

from linuxwatcher.core.models import KernelRelease

logger = logging.getLogger(__name__)

MARKER_VERSION = "VERSION"
MARKER_PATCHLEVEL = "PATCHLEVEL"
MARKER_SUBLEVEL = "SUBLEVEL"
MARKER_EXTRAVERSION = "EXTRAVERSION"
MARKER_NAME = "NAME"

REQUIRED_MARKERS = (MARKER_VERSION, MARKER_PATCHLEVEL, MARKER_SUBLEVEL, MARKER_NAME)
NUMERIC_MARKERS = (MARKER_VERSION, MARKER_PATCHLEVEL, MARKER_SUBLEVEL)

SEPARATOR = "="


class ExtractionError(ValueError):
    """Raised when the fetched text does not carry the expected fields."""

    def __init__(self, marker: str, message: str):
        super().__init__(message)
        self.marker = marker


class FieldNotFoundError(ExtractionError):
    def __init__(self, marker: str):
        super().__init__(marker, f"Field {marker!r} not found")


class UnterminatedFieldError(ExtractionError):
    def __init__(self, marker: str):
        super().__init__(marker, f"Field {marker!r} has no line break (truncated read?)")


def _split_assignment(line: str) -> tuple[str, str] | None:
    key, sep, value = line.partition(SEPARATOR)
    if not sep:
        return None
    return key.strip(), value.strip()


def extract_field(text: str, marker: str) -> str:
    """Return the value assigned to ``marker`` in ``text``.

    Scans complete lines only; the first assignment whose left-hand side is
    exactly ``marker`` wins. Raises FieldNotFoundError if no line assigns it,
    UnterminatedFieldError if only the trailing partial line does.
    """
    lines = text.split("\n")
    # Everything before the last "\n" is complete; the remainder is not
    complete, tail = lines[:-1], lines[-1]

    for line in complete:
        parsed = _split_assignment(line.rstrip("\r"))
        if parsed and parsed[0] == marker:
            return parsed[1]

    parsed = _split_assignment(tail)
    if parsed and parsed[0] == marker:
        raise UnterminatedFieldError(marker)
    raise FieldNotFoundError(marker)


def _check_release_number(fields: dict) -> None:
    """Each numeric field is a plain decimal and together they form X.Y.Z."""
    for marker in NUMERIC_MARKERS:
        if not fields[marker].isdecimal():
            raise ExtractionError(marker, f"Field {marker!r} is not a number: {fields[marker]!r}")

    numeric = ".".join(fields[m] for m in NUMERIC_MARKERS)
    try:
        v = Version(numeric)
    except InvalidVersion as e:
        raise ExtractionError(MARKER_VERSION, f"Not a release number: {numeric!r}") from e
    # Version normalizes leading zeros and non-ASCII digits away
    if len(v.release) != 3 or str(v) != numeric:
        raise ExtractionError(MARKER_VERSION, f"Not a release number: {numeric!r}")


def extract_release(text: str) -> KernelRelease:
    """Extract all version fields and validate them as a release number.

    EXTRAVERSION is optional: when no line assigns it, it is empty. An
    EXTRAVERSION cut off on the trailing partial line is not treated as
    absent, since that would silently drop an -rc suffix; it raises
    UnterminatedFieldError like any required field.
    """
    fields = {}
    for marker in REQUIRED_MARKERS:
        value = extract_field(text, marker)
        if not value:
            raise ExtractionError(marker, f"Field {marker!r} is empty")
        fields[marker] = value

    try:
        extraversion = extract_field(text, MARKER_EXTRAVERSION)
    except FieldNotFoundError:
        extraversion = ""

    _check_release_number(fields)

    release = KernelRelease(
        version=fields[MARKER_VERSION],
        patchlevel=fields[MARKER_PATCHLEVEL],
        sublevel=fields[MARKER_SUBLEVEL],
        name=fields[MARKER_NAME],
        extraversion=extraversion,
    )
    logger.debug("Extracted release %s (%s)", release.release, release.name)
    return release
