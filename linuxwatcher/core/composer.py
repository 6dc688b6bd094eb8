"""Turns a fetch result into the text shown on the label."""

import logging

from linuxwatcher.core.extractor import ExtractionError, extract_release
from linuxwatcher.core.models import (
    DisplayOutcome, FetchFailure, FetchResult, KernelRelease, WatchState,
)

logger = logging.getLogger(__name__)

NO_NETWORK_MESSAGE = "Cannot connect to the internet."
FETCH_FAILED_MESSAGE = "Cannot retrieve current version of Linux. An error may have occurred."
MALFORMED_MESSAGE = "Cannot read current version of Linux. Malformed response."


def compose_version(release: KernelRelease) -> str:
    """Format as ``5.10.7 "Kleptomaniac Octopus"``."""
    return f'{release.release} "{release.name}"'


def no_network() -> DisplayOutcome:
    return DisplayOutcome(WatchState.NO_NETWORK, NO_NETWORK_MESSAGE)


def resolve(result: FetchResult) -> DisplayOutcome:
    """Map a fetch result onto its terminal display state."""
    if isinstance(result, FetchFailure):
        return DisplayOutcome(WatchState.FETCH_FAILED, FETCH_FAILED_MESSAGE)

    try:
        release = extract_release(result.text)
    except ExtractionError as e:
        logger.warning("Malformed response from %s: %s", result.url, e)
        return DisplayOutcome(WatchState.MALFORMED, MALFORMED_MESSAGE)

    return DisplayOutcome(WatchState.DISPLAYING, compose_version(release), enlarged=True)
