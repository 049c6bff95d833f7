"""Translates the toolkit configuration into a compose invocation."""

import os
from typing import Dict, List, Optional, Sequence

import yaml

from overleaf_toolkit.constants import (
    BASE_OVERLAY,
    COMMUNITY_IMAGE,
    DEFAULT_DOCKER_SOCKET_PATH,
    DEFAULT_LISTEN_IP,
    DEFAULT_MONGO_IMAGE,
    DEFAULT_PORT,
    DEFAULT_PROJECT_NAME,
    DEFAULT_REDIS_IMAGE,
    FEATURE_OVERLAYS,
    OVERRIDE_OVERLAY,
    SERVER_PRO_IMAGE,
)
from overleaf_toolkit.models import ComposeInvocation, ToolkitConfiguration
from overleaf_toolkit.services.version_store import validate_version


class ComposeBuilder:
    """Builds the ordered overlay list and the exported environment.

    Nothing here touches the process environment; the result is merged into
    the child environment by the runtime service at the call site.
    """

    def __init__(self, root: str, logger):
        self.root = root
        self.logger = logger

    def build(
        self,
        config: ToolkitConfiguration,
        installed_version: str,
        args: Sequence[str] = (),
    ) -> ComposeInvocation:
        validate_version(installed_version, "config/version")

        return ComposeInvocation(
            project_name=config.get("PROJECT_NAME", DEFAULT_PROJECT_NAME),
            overlays=tuple(self.select_overlays(config)),
            environment=self.build_environment(config, installed_version),
            args=tuple(args),
        )

    def select_overlays(self, config: ToolkitConfiguration) -> List[str]:
        overlays = [os.path.join(self.root, BASE_OVERLAY)]
        for flag, overlay in FEATURE_OVERLAYS:
            if config.flag(flag):
                overlays.append(os.path.join(self.root, overlay))

        override = os.path.join(self.root, OVERRIDE_OVERLAY)
        if os.path.isfile(override):
            overlays.append(override)
        return overlays

    def build_environment(self, config: ToolkitConfiguration, installed_version: str) -> Dict[str, str]:
        environment = {"IMAGE": f"{self.image_name(config)}:{installed_version}"}

        listen_ip = config.get("SHARELATEX_LISTEN_IP")
        if listen_ip is None:
            self.logger.warning(
                "SHARELATEX_LISTEN_IP is not set in config/overleaf.rc. It must be set to the "
                "public IP address for direct container access. Defaulting to %s",
                DEFAULT_LISTEN_IP,
            )
            listen_ip = DEFAULT_LISTEN_IP
        environment["SHARELATEX_LISTEN_IP"] = listen_ip
        environment["SHARELATEX_PORT"] = config.get("SHARELATEX_PORT", DEFAULT_PORT)
        self._export_path(environment, config, "SHARELATEX_DATA_PATH")

        if config.flag("REDIS_ENABLED"):
            environment["REDIS_IMAGE"] = config.get("REDIS_IMAGE", DEFAULT_REDIS_IMAGE)
            self._export_path(environment, config, "REDIS_DATA_PATH")

        if config.flag("MONGO_ENABLED"):
            environment["MONGO_IMAGE"] = config.get("MONGO_IMAGE", DEFAULT_MONGO_IMAGE)
            self._export_path(environment, config, "MONGO_DATA_PATH")

        if config.flag("SIBLING_CONTAINERS_ENABLED"):
            self._export_path(environment, config, "DOCKER_SOCKET_PATH", DEFAULT_DOCKER_SOCKET_PATH)

        if config.flag("NGINX_ENABLED"):
            for key in ("NGINX_HTTP_PORT", "NGINX_HTTP_LISTEN_IP", "NGINX_TLS_LISTEN_IP", "TLS_PORT"):
                value = config.get(key)
                if value is not None:
                    environment[key] = value
            for key in ("NGINX_CONFIG_PATH", "TLS_PRIVATE_KEY_PATH", "TLS_CERTIFICATE_PATH"):
                self._export_path(environment, config, key)

        return environment

    def image_name(self, config: ToolkitConfiguration) -> str:
        override = config.get("SHARELATEX_IMAGE_NAME")
        if override:
            return override
        if config.flag("SERVER_PRO"):
            return SERVER_PRO_IMAGE
        return COMMUNITY_IMAGE

    def debug_report(self, invocation: ComposeInvocation) -> str:
        report = {
            "general": {
                "toolkit_root": self.root,
                "project_name": invocation.project_name,
            },
            "environment": dict(sorted(invocation.environment.items())),
            "arguments": invocation.arguments,
        }
        return yaml.safe_dump(report, sort_keys=False, default_flow_style=False)

    def _export_path(
        self,
        environment: Dict[str, str],
        config: ToolkitConfiguration,
        key: str,
        default: Optional[str] = None,
    ):
        value = config.path(key, self.root) or default
        if value is not None:
            environment[key] = value
