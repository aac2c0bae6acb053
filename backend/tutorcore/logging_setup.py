"""Process-wide logging configuration."""

import logging
from typing import Optional

from tutorcore.profile import Profile, get_profile


def configure_logging(profile: Optional[Profile] = None):
    """Apply the profile's logging settings to the root logger."""
    cfg = (profile or get_profile()).logging
    logging.basicConfig(
        level=getattr(logging, cfg.level.upper(), logging.INFO),
        format=cfg.format,
        datefmt=cfg.datefmt,
    )
