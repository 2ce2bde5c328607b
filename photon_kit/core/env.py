"""Environment configuration for photon_kit.

Load order (first wins):
  1. Existing OS environment variables, never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Only PHOTON_* keys are taken from a .env file; other keys are ignored so a
project .env shared with other tools cannot change unrelated variables.

Settings:
  PHOTON_WORKERS    threads used by the pixel and convolution drivers (default 1)
  PHOTON_MIN_ROWS   minimum scanlines handed to one worker task (default 64)
  PHOTON_LOG_LEVEL  log level used by the command line tool (default WARNING)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from photon_kit.core.errors import InvalidArgument

PREFIX = 'PHOTON_'

logger = logging.getLogger(__name__)


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse PHOTON_* entries of a .env file. Handles KEY=value, KEY="value" and `export KEY=value`."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip().removeprefix('export ').strip()
        if not key.startswith(PREFIX):
            continue
        result[key] = raw_value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load PHOTON_* keys from a .env into os.environ where not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value
    logger.debug('loaded %s', path)
    return path


def _int_setting(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidArgument(f'{name} must be an integer, got {raw!r}') from e
    if value < minimum:
        raise InvalidArgument(f'{name} must be >= {minimum}, got {value}')
    return value


@dataclass(frozen=True)
class Settings:
    """Driver and logging configuration read from the environment."""

    workers: int = 1
    min_rows: int = 64
    log_level: str = 'WARNING'

    @classmethod
    def from_env(cls) -> 'Settings':
        level = os.environ.get(f'{PREFIX}LOG_LEVEL', cls.log_level).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidArgument(f'{PREFIX}LOG_LEVEL is not a log level: {level!r}')
        return cls(
            workers=_int_setting(f'{PREFIX}WORKERS', cls.workers, 1),
            min_rows=_int_setting(f'{PREFIX}MIN_ROWS', cls.min_rows, 1),
            log_level=level,
        )
