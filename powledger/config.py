"""
Configuration for the ledger.

Values come from code defaults, a JSON file, or POWLEDGER_* environment
variables. Difficulty is threaded through to the proof-of-work engine
instead of living in a module constant, so tests can run at low difficulty.
"""

import json
import os
from dataclasses import dataclass, asdict
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from .exceptions import ConfigError


DEFAULT_DIFFICULTY = 10
DEFAULT_BLOCK_REWARD = Decimal("10.0")
DEFAULT_KEY_SIZE = 2048
DEFAULT_PROGRESS_INTERVAL = 1000

ENV_PREFIX = "POWLEDGER_"


@dataclass
class LedgerConfig:
    """Ledger and mining configuration."""
    difficulty: int = DEFAULT_DIFFICULTY
    block_reward: Decimal = DEFAULT_BLOCK_REWARD
    seed: Optional[int] = None              # None -> nondeterministic start nonces
    key_size: int = DEFAULT_KEY_SIZE        # RSA modulus bits
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    def __post_init__(self):
        if not isinstance(self.block_reward, Decimal):
            self.block_reward = _to_decimal('block_reward', self.block_reward)

        for name in ('difficulty', 'key_size', 'progress_interval'):
            _require_int(name, getattr(self, name))
        if self.seed is not None:
            _require_int('seed', self.seed)

        if not 1 <= self.difficulty <= 256:
            raise ConfigError("Difficulty must be between 1 and 256")
        if not self.block_reward.is_finite() or self.block_reward < 0:
            raise ConfigError("Block reward must be a non-negative finite amount")
        if self.key_size < 1024:
            raise ConfigError("RSA key size must be at least 1024 bits")
        if self.progress_interval < 1:
            raise ConfigError("Progress interval must be positive")

    @classmethod
    def default(cls) -> 'LedgerConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'LedgerConfig':
        """
        Load configuration from POWLEDGER_* environment variables.

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ConfigError: If a variable cannot be parsed
        """
        if environ is None:
            environ = os.environ

        values: Dict[str, Any] = {}
        for name, parse in (
            ('difficulty', int),
            ('block_reward', Decimal),
            ('seed', int),
            ('key_size', int),
            ('progress_interval', int),
        ):
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None or raw == "":
                continue
            try:
                values[name] = parse(raw)
            except (ValueError, InvalidOperation) as exc:
                raise ConfigError(f"Invalid {ENV_PREFIX}{name.upper()}: {raw!r}") from exc

        return cls(**values)

    @classmethod
    def from_file(cls, path: str) -> 'LedgerConfig':
        """Load configuration from a JSON file."""
        with open(path, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Malformed config file {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must hold a JSON object")

        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data['block_reward'] = str(self.block_reward)
        return data


def _to_decimal(name: str, value: Any) -> Decimal:
    # floats go through str() so 10.0 stays Decimal("10.0")
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: {value!r}") from exc


def _require_int(name: str, value: Any) -> None:
    # bool is an int subclass but never a valid setting
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
