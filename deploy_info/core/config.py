"""Typed configuration loading and access.

Configuration comes from three layers, highest precedence first:
- process environment (``GITLAB_API_TOKEN`` and friends)
- an optional TOML file passed with ``--config``
- built-in defaults

The token is only ever read from the environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "load_config",
    "mask_token",
    "DEFAULT_BASE_URL",
    "DEFAULT_BROWSE_URL",
    "DEFAULT_CD_PREFIX",
    "DEFAULT_MANIFEST_FILE",
    "ENV_TOKEN",
    "ENV_BASE_URL",
    "ENV_BROWSE_URL",
    "ENV_TIMEOUT",
]

DEFAULT_BASE_URL = "https://gitlab.com/api/v4"
DEFAULT_BROWSE_URL = "https://mediciventures.atlassian.net/browse/"
DEFAULT_CD_PREFIX = "cd-"
DEFAULT_MANIFEST_FILE = "Chart.yaml"

ENV_TOKEN = "GITLAB_API_TOKEN"
ENV_BASE_URL = "GITLAB_API_URL"
ENV_BROWSE_URL = "DEPLOY_INFO_BROWSE_URL"
ENV_TIMEOUT = "DEPLOY_INFO_TIMEOUT"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or is incomplete.

    ``path`` is only set when the config file itself could not be read or
    parsed; a readable file holding a bad value is reported without it.
    """

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Settings threaded into the API client and the resolver.

    Attributes:
        token: GitLab private token, sent as the PRIVATE-TOKEN header
        base_url: GitLab REST API root, without trailing slash
        browse_url: Issue tracker prefix; a ticket id is appended to it
        timeout: Per-request timeout in seconds, None for the transport default
        cd_prefix: Prefix turning an app name into its CD project name
        manifest_file: Manifest file name inside ``<app>/`` in the CD project
    """

    token: str
    base_url: str = DEFAULT_BASE_URL
    browse_url: str = DEFAULT_BROWSE_URL
    timeout: float | None = None
    cd_prefix: str = DEFAULT_CD_PREFIX
    manifest_file: str = DEFAULT_MANIFEST_FILE

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, token: str) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        gitlab: StrDict = get_table(data, "gitlab") or {}
        jira: StrDict = get_table(data, "jira") or {}
        pipeline: StrDict = get_table(data, "pipeline") or {}

        return cls(
            token=token,
            base_url=(get_str(gitlab, "url") or DEFAULT_BASE_URL).rstrip("/"),
            browse_url=get_str(jira, "browse_url") or DEFAULT_BROWSE_URL,
            timeout=get_number(gitlab, "timeout"),
            cd_prefix=get_str(pipeline, "cd_prefix") or DEFAULT_CD_PREFIX,
            manifest_file=get_str(pipeline, "manifest_file") or DEFAULT_MANIFEST_FILE,
        )


def mask_token(token: str) -> str:
    """Render a token for diagnostics without revealing it."""
    if len(token) <= 4:
        return "****"
    return "****" + token[-4:]


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def _apply_env(config: Config, environ: Mapping[str, str]) -> Result[Config, ConfigError]:
    base_url = environ.get(ENV_BASE_URL, "").strip()
    browse_url = environ.get(ENV_BROWSE_URL, "").strip()
    raw_timeout = environ.get(ENV_TIMEOUT, "").strip()

    timeout = config.timeout
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            return Err(ConfigError(f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}"))

    return Ok(
        Config(
            token=config.token,
            base_url=base_url.rstrip("/") if base_url else config.base_url,
            browse_url=browse_url or config.browse_url,
            timeout=timeout,
            cd_prefix=config.cd_prefix,
            manifest_file=config.manifest_file,
        )
    )


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Result[Config, ConfigError]:
    """Load configuration from an optional TOML file and the environment.

    Args:
        path: Optional path to a config.toml file
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    env = os.environ if environ is None else environ

    token = env.get(ENV_TOKEN, "").strip()
    if not token:
        return Err(
            ConfigError(
                f"{ENV_TOKEN} is not set",
                hint=f"export {ENV_TOKEN}=<gitlab personal access token>",
            )
        )

    data: StrDict = {}
    if path is not None:
        parsed = _parse_toml(path)
        if isinstance(parsed, Err):
            return parsed
        data = parsed.value

    try:
        config = Config.from_dict(data, token=token)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure in {path}: {e}"))

    result = _apply_env(config, env)
    if isinstance(result, Err):
        return result

    if result.value.timeout is not None and result.value.timeout <= 0:
        return Err(
            ConfigError(
                "timeout must be greater than zero",
                hint=f"set a positive {ENV_TIMEOUT} or [gitlab] timeout",
            )
        )
    return result
