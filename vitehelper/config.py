import logging
import math
import os
import tomllib
from dataclasses import dataclass
from functools import cache

from dotenv import load_dotenv

from .models import ConfigError, OutputMode

logger = logging.getLogger(__name__)

DEFAULT_DEV_SERVER_URL = "http://localhost:5173"
DEFAULT_BUILD_DIR = "build"
DEFAULT_MANIFEST_FILE = "manifest.json"
DEFAULT_PROBE_TIMEOUT = 0.5


def setup_package_logger(level: str = "INFO", log_file: str | None = None):
    logger = logging.getLogger("vitehelper")
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-6s - %(name)s - %(message)s"
    )
    for existing in logger.handlers:
        existing.setLevel(numeric_level)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric_level)
        logger.addHandler(file_handler)

    return logger


def trailingslashit(value: str) -> str:
    return value.rstrip("/\\") + "/"


@dataclass(frozen=True)
class ViteConfig:
    slug: str
    base_url: str
    base_path: str
    dev_server_url: str = DEFAULT_DEV_SERVER_URL
    build_dir: str = DEFAULT_BUILD_DIR
    manifest_file: str = DEFAULT_MANIFEST_FILE
    output_mode: OutputMode = OutputMode.MANIFEST
    # Seconds, fractions allowed
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT

    def __post_init__(self):
        try:
            output_mode = OutputMode(self.output_mode)
        except ValueError as e:
            raise ConfigError(f"Invalid output mode: {self.output_mode!r}") from e
        try:
            probe_timeout = float(self.probe_timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid probe timeout: {self.probe_timeout!r}") from e
        # requests rejects a zero timeout with a bare ValueError
        if math.isnan(probe_timeout) or probe_timeout <= 0:
            raise ConfigError(f"Probe timeout must be positive: {self.probe_timeout}")

        # Frozen dataclass: normalized values are written through object.__setattr__
        object.__setattr__(self, "base_url", trailingslashit(self.base_url))
        object.__setattr__(self, "base_path", trailingslashit(str(self.base_path)))
        object.__setattr__(self, "dev_server_url", self.dev_server_url.rstrip("/"))
        object.__setattr__(self, "build_dir", self.build_dir.strip("/"))
        object.__setattr__(self, "manifest_file", self.manifest_file.lstrip("/"))
        object.__setattr__(self, "output_mode", output_mode)
        object.__setattr__(self, "probe_timeout", probe_timeout)

    @property
    def manifest_path(self) -> str:
        return f"{self.base_path}{self.build_dir}/{self.manifest_file}"

    @property
    def build_path(self) -> str:
        return f"{self.base_path}{self.build_dir}"

    @property
    def build_url(self) -> str:
        return f"{self.base_url}{self.build_dir}/"

    @property
    def vite_client_handle(self) -> str:
        return f"{self.slug}-vite-client"

    @property
    def vite_client_url(self) -> str:
        return f"{self.dev_server_url}/@vite/client"


def load_config_from_toml(file_path: str) -> ViteConfig:
    with open(file_path, "rb") as f:
        data = tomllib.load(f)

    vite = data.get("vite", {})
    try:
        return ViteConfig(
            slug=vite["slug"],
            base_url=vite["base_url"],
            base_path=vite["base_path"],
            dev_server_url=vite.get("dev_server_url", DEFAULT_DEV_SERVER_URL),
            build_dir=vite.get("build_dir", DEFAULT_BUILD_DIR),
            manifest_file=vite.get("manifest_file", DEFAULT_MANIFEST_FILE),
            output_mode=vite.get("output_mode", OutputMode.MANIFEST),
            probe_timeout=vite.get("probe_timeout", DEFAULT_PROBE_TIMEOUT),
        )
    except KeyError as e:
        raise ConfigError(f"Missing required [vite] setting: {e.args[0]}") from e


def load_config_from_env(slug: str, base_url: str, base_path: str) -> ViteConfig:
    """Build a config for one app, taking the optional settings from VITE_* variables."""
    load_dotenv()
    try:
        probe_timeout = float(os.environ.get("VITE_PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT))
    except ValueError as e:
        raise ConfigError(f"Invalid VITE_PROBE_TIMEOUT: {e}") from e

    return ViteConfig(
        slug=slug,
        base_url=base_url,
        base_path=base_path,
        dev_server_url=os.environ.get("VITE_DEV_SERVER_URL", DEFAULT_DEV_SERVER_URL),
        build_dir=os.environ.get("VITE_BUILD_DIR", DEFAULT_BUILD_DIR),
        manifest_file=os.environ.get("VITE_MANIFEST_FILE", DEFAULT_MANIFEST_FILE),
        output_mode=os.environ.get("VITE_OUTPUT_MODE", OutputMode.MANIFEST.value),
        probe_timeout=probe_timeout,
    )


@cache
def get_sentry_config() -> dict[str, str]:
    """Get Sentry configuration from environment, reading .env.sentry first."""
    if load_dotenv(".env.sentry"):
        logger.info("Loaded Sentry environment variables from dotfile")
    else:
        logger.debug("No Sentry dotfile found, using environment variables")

    environment = os.environ.get("SENTRY_ENVIRONMENT", "development")
    release = os.environ.get("SENTRY_RELEASE", "unknown")

    logger.debug("Using Sentry environment: %s", environment)
    logger.debug("Using Sentry release: %s", release)

    return {
        "dsn": os.environ.get("SENTRY_DSN", ""),
        "environment": environment,
        "release": release,
    }
