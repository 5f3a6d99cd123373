import os
from dataclasses import dataclass, fields, replace


@dataclass
class Settings:
    """runtime settings shared by every query"""
    # warn once when a linear-scan key store grows past this many keys (0 disables)
    scan_warning_threshold: int = 10_000
    # emit debug records when an operator buffers its source
    log_materialization: bool = True

    def __post_init__(self):
        if self.scan_warning_threshold < 0:
            raise ValueError("scan_warning_threshold must be zero or positive")

    @classmethod
    def from_env(cls) -> 'Settings':
        """build settings from LINQY_* environment variables, falling back to defaults"""
        defaults = cls()
        threshold = os.environ.get('LINQY_SCAN_WARNING_THRESHOLD')
        log_flag = os.environ.get('LINQY_LOG_MATERIALIZATION')
        try:
            parsed_threshold = int(threshold) if threshold else defaults.scan_warning_threshold
        except ValueError:
            raise ValueError(
                f"LINQY_SCAN_WARNING_THRESHOLD must be an integer, got {threshold!r}") from None
        return cls(
            scan_warning_threshold=parsed_threshold,
            log_materialization=(log_flag.strip().lower() not in ('0', 'false', 'no', 'off'))
            if log_flag else defaults.log_materialization,
        )


_settings = Settings.from_env()


def get_settings() -> Settings:
    return _settings


def configure(**changes) -> Settings:
    """update the process-wide settings. unknown names raise TypeError."""
    global _settings
    known = {f.name for f in fields(Settings)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"unknown setting(s): {', '.join(sorted(unknown))}")
    _settings = replace(_settings, **changes)
    return _settings
