"""Runtime configuration for the gh-activity command.

The command takes everything it needs from its arguments; the environment
only tunes diagnostic logging.

>>> import os
>>> os.environ["GHACTIVITY_LOG_LEVEL"] = "debug"
>>> ActivityConfig.from_env().log_level
'DEBUG'

"""

from __future__ import annotations

import dataclasses as dc
import os

from ghactivity.logging import DEFAULT_LOG_LEVEL, normalize_log_level

LOG_LEVEL_ENV_VAR = "GHACTIVITY_LOG_LEVEL"


@dc.dataclass(frozen=True, slots=True)
class ActivityConfig:
    """Configuration for a single gh-activity run.

    Attributes
    ----------
    log_level
        Normalised femtologging level for diagnostics written to stderr.
    invalid_log_level
        Raw value of ``GHACTIVITY_LOG_LEVEL`` when it could not be parsed,
        so the caller can warn once logging is configured.

    """

    log_level: str = DEFAULT_LOG_LEVEL
    invalid_log_level: str | None = None

    @classmethod
    def from_env(cls) -> ActivityConfig:
        """Create configuration from ``GHACTIVITY_LOG_LEVEL``.

        An unset variable selects the default level silently; an unparseable
        one selects the default and is recorded in ``invalid_log_level``.
        """
        raw = os.environ.get(LOG_LEVEL_ENV_VAR, "")
        if not raw.strip():
            return cls()

        level, invalid = normalize_log_level(raw)
        return cls(log_level=level, invalid_log_level=raw if invalid else None)
