"""Data models for one fetch-and-display pass."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class KernelRelease:
    """Version fields extracted from the kernel Makefile."""

    version: str            # VERSION (major)
    patchlevel: str         # PATCHLEVEL (minor)
    sublevel: str           # SUBLEVEL (patch)
    name: str               # NAME (codename)
    extraversion: str = ""  # EXTRAVERSION, e.g. "-rc3"

    @property
    def release(self) -> str:
        return f"{self.version}.{self.patchlevel}.{self.sublevel}{self.extraversion}"


@dataclass(frozen=True)
class FetchSuccess:
    """Outcome of a fetch that returned a body prefix."""
    url: str
    text: str


@dataclass(frozen=True)
class FetchFailure:
    """Outcome of a fetch that failed at the I/O level."""
    url: str
    error: Exception


FetchResult = FetchSuccess | FetchFailure


class WatchState(Enum):
    IDLE = "idle"
    CHECKING_CONNECTIVITY = "checking_connectivity"
    NO_NETWORK = "no_network"
    FETCHING = "fetching"
    FETCH_FAILED = "fetch_failed"
    FETCHED = "fetched"
    EXTRACTING = "extracting"
    MALFORMED = "malformed"
    DISPLAYING = "displaying"


TERMINAL_STATES = frozenset({
    WatchState.NO_NETWORK,
    WatchState.FETCH_FAILED,
    WatchState.MALFORMED,
    WatchState.DISPLAYING,
})


@dataclass(frozen=True)
class DisplayOutcome:
    """What the label ends up showing."""
    state: WatchState
    text: str
    enlarged: bool = False  # Version string uses the larger font
