"""Output profiles and selector lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config.constants import DEFAULT_PROFILE_KEY
from .base import UnknownProfileError

if TYPE_CHECKING:
    from ..config.settings import DispatchConfig

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    """Named transcoding parameter set."""

    key: str
    extension: str
    output_arguments: tuple[str, ...]
    selectors: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""
    mode_banner: str | None = None  # Printed when the profile is picked on the command line


BUILTIN_PROFILES: dict[str, Profile] = {
    "320": Profile(
        key="320",
        extension="mp3",
        output_arguments=("-ab", "320k", "-map_metadata", "0", "-id3v2_version", "3"),
        selectors=("320",),
        description="High-bitrate lossy MP3 (320 kbps CBR)",
    ),
    "16bit": Profile(
        key="16bit",
        extension="flac",
        output_arguments=("-sample_fmt", "s16"),
        selectors=("16bit",),
        description="Downsample to 16-bit lossless FLAC",
        mode_banner="16-bit mode",
    ),
    "v0": Profile(
        key="v0",
        extension="mp3",
        output_arguments=("-c:a", "libmp3lame", "-q:a", "0", "-map_metadata", "0", "-id3v2_version", "3"),
        selectors=("v0",),
        description="Variable-bitrate lossy MP3, maximum quality (V0)",
        mode_banner="v0 mode",
    ),
}


def build_profile_table(config: DispatchConfig | None = None) -> dict[str, Profile]:
    """
    Built-in profiles, extended or overridden by config.yaml entries.

    Config entries come after the built-ins, so their selectors take
    precedence in :func:`select_profile`. An overridden built-in keeps its
    mode banner.
    """
    if config is None:
        return dict(BUILTIN_PROFILES)

    profiles = {key: profile for key, profile in BUILTIN_PROFILES.items() if key not in config.profiles}
    for key, entry in config.profiles.items():
        builtin = BUILTIN_PROFILES.get(key)
        if builtin is not None:
            LOG.info("Overriding built-in profile '%s' from config", key)
        profile = Profile(
            key=key,
            extension=entry.extension,
            output_arguments=tuple(entry.arguments),
            selectors=tuple(entry.selectors) or (key,),
            description=entry.description,
            mode_banner=builtin.mode_banner if builtin is not None else None,
        )
        for other in profiles.values():
            for selector in set(profile.selectors) & set(other.selectors):
                LOG.warning(
                    "Selector '%s' of profile '%s' shadows profile '%s'", selector, profile.key, other.key
                )
        profiles[key] = profile
    return profiles


def get_profile(key: str, profiles: dict[str, Profile] | None = None) -> Profile:
    """Look up a profile by key, raising for unknown keys."""
    table = BUILTIN_PROFILES if profiles is None else profiles
    if key not in table:
        raise UnknownProfileError(key, sorted(table))
    return table[key]


def select_profile(selector: str | None, profiles: dict[str, Profile] | None = None) -> Profile:
    """
    Map a command-line selector to a profile.

    An absent or unrecognized selector falls back to the default profile
    without raising.
    """
    table = BUILTIN_PROFILES if profiles is None else profiles
    if selector is not None:
        # Later entries win, so config profiles shadow built-ins
        for profile in reversed(table.values()):
            if selector in profile.selectors:
                return profile
        LOG.debug("Unrecognized profile selector '%s', using default", selector)
    return get_profile(DEFAULT_PROFILE_KEY, table)
