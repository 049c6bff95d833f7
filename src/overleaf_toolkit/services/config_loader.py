"""Configuration loader for the Overleaf toolkit."""

import shlex
from pathlib import Path

from overleaf_toolkit.errors import ConfigurationError
from overleaf_toolkit.errors_catalog import actionable_error
from overleaf_toolkit.models import ToolkitConfiguration


class ConfigLoader:
    """Loads the shell-style `overleaf.rc` key/value file."""

    SUPPORTED_KEYS = {
        "PROJECT_NAME",
        "SERVER_PRO",
        "SHARELATEX_IMAGE_NAME",
        "SHARELATEX_DATA_PATH",
        "SHARELATEX_LISTEN_IP",
        "SHARELATEX_PORT",
        "REDIS_ENABLED",
        "REDIS_DATA_PATH",
        "REDIS_IMAGE",
        "MONGO_ENABLED",
        "MONGO_DATA_PATH",
        "MONGO_IMAGE",
        "SIBLING_CONTAINERS_ENABLED",
        "DOCKER_SOCKET_PATH",
        "NGINX_ENABLED",
        "NGINX_CONFIG_PATH",
        "NGINX_HTTP_PORT",
        "NGINX_HTTP_LISTEN_IP",
        "NGINX_TLS_LISTEN_IP",
        "TLS_PORT",
        "TLS_PRIVATE_KEY_PATH",
        "TLS_CERTIFICATE_PATH",
        "RC_DEBUG",
    }

    def __init__(self, logger):
        self.logger = logger

    def load(self, config_path: str) -> ToolkitConfiguration:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigurationError(actionable_error("config_not_found", path=str(path)))

        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise ConfigurationError(f"Could not read config file '{path}': {exc}") from exc

        values = {}
        for number, line in enumerate(lines, start=1):
            try:
                tokens = shlex.split(line, comments=True)
            except ValueError as exc:
                raise ConfigurationError(
                    actionable_error(
                        "invalid_config_line", line=str(number), path=str(path), content=line.strip()
                    )
                ) from exc

            if tokens and tokens[0] == "export":
                tokens = tokens[1:]
            if not tokens:
                continue
            if len(tokens) != 1 or "=" not in tokens[0]:
                raise ConfigurationError(
                    actionable_error(
                        "invalid_config_line", line=str(number), path=str(path), content=line.strip()
                    )
                )

            key, _, value = tokens[0].partition("=")
            if key not in self.SUPPORTED_KEYS:
                self.logger.debug("Ignoring unrecognized configuration key: %s", key)
                continue
            values[key] = value

        return ToolkitConfiguration(values=values)
