# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Project Profiler - workspace fingerprinting.

Usage::

    from mentat.profile import detect

    profile = await detect("/path/to/workspace")
    print(profile.languages, profile.framework)
"""

from mentat.profile.detector import clear_detect_cache, detect
from mentat.profile.models import UNKNOWN_LANGUAGE, ProjectProfile

__all__ = [
    "UNKNOWN_LANGUAGE",
    "ProjectProfile",
    "clear_detect_cache",
    "detect",
]
