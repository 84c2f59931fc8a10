"""Run policy and user settings for devsweep."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from devsweep.errors import ConfigError
from devsweep.models import CleanLevel, Domain
from devsweep.safety import parse_clean_level
from devsweep.utils import expand_path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DEVSWEEP_CONFIG"
DEFAULT_CONFIG_FILE = "~/.devsweep/config.json"

# Alternative spellings accepted for --domain
_DOMAIN_ALIASES = {
    "data/ml": Domain.DATAML,
    "ml": Domain.DATAML,
}


def parse_domain(text: str) -> Domain:
    """Convert a domain name (case insensitive) to a Domain.

    Raises:
        ConfigError: If the name is not a known domain
    """
    key = text.strip().lower()
    if key in _DOMAIN_ALIASES:
        return _DOMAIN_ALIASES[key]
    try:
        return Domain(key)
    except ValueError:
        valid = ", ".join(d.value for d in Domain)
        raise ConfigError(f"invalid domain: {text} (must be one of {valid})") from None


class Policy(BaseModel):
    """Options governing one scan/clean run."""

    clean_level: CleanLevel = Field(CleanLevel.STANDARD, description="How aggressive to be")
    dry_run: bool = Field(False, description="Report without deleting anything")
    interactive: bool = Field(True, description="Ask before deleting")
    domains: list[Domain] = Field(
        default_factory=list,
        description="Domains to include (empty = all)",
    )

    @classmethod
    def from_options(
        cls,
        level: str = "standard",
        *,
        dry_run: bool = False,
        interactive: bool = True,
        domains: Optional[list[str]] = None,
    ) -> "Policy":
        """
        Build a policy from raw option strings.

        Each domain value may name several domains separated by commas,
        so ``["frontend,backend", "ml"]`` selects three domains.

        Raises:
            ConfigError: If the level or a domain name is invalid
        """
        return cls(
            clean_level=parse_clean_level(level),
            dry_run=dry_run,
            interactive=interactive,
            domains=[
                parse_domain(name)
                for value in domains or []
                for name in value.split(",")
                if name.strip()
            ],
        )

    def includes_domain(self, domain: Domain) -> bool:
        """Whether collectors of this domain take part in the run."""
        return not self.domains or domain in self.domains


class Settings(BaseModel):
    """Persistent user settings read from the config file."""

    search_dirs: list[str] = Field(
        default_factory=list,
        description="Extra directories to search for project artifacts",
    )
    protected_paths: list[str] = Field(
        default_factory=list,
        description="Paths (and everything below them) that are never deleted",
    )
    max_concurrent: int = Field(4, ge=1, description="Search roots walked in parallel")


def config_file() -> Path:
    """Location of the settings file."""
    return expand_path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from disk.

    Args:
        path: Settings file; defaults to ``config_file()``

    Returns:
        Settings, or defaults when the file does not exist

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    path = path or config_file()
    if not path.exists():
        logger.debug("No settings file at %s, using defaults", path)
        return Settings()

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings file {path}: {e}") from e
