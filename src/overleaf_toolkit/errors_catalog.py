"""Actionable error catalog for the Overleaf toolkit."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "root_not_found": {
        "what": "Could not find the root of the toolkit project (inferred root: '{path}').",
        "next": "Run the command from the toolkit checkout or pass `--root`.",
    },
    "config_not_found": {
        "what": "Configuration file not found: {path}",
        "next": "Run `overleaf-toolkit init` to create the default configuration.",
    },
    "config_exists": {
        "what": "Configuration files already exist in {path}.",
        "next": "Edit the existing files or remove them before running `init` again.",
    },
    "invalid_config_line": {
        "what": "Invalid line {line} in {path}: {content}",
        "next": "Use `KEY=value` lines; quote values containing spaces.",
    },
    "version_not_found": {
        "what": "Version file not found: {path}",
        "next": "Restore the file from `config/__old-version` or `lib/config-seed/version`.",
    },
    "invalid_version": {
        "what": "Invalid version '{version}' in {path}.",
        "next": "Write a version such as `4.2.9` or `4.3.0-RC` on the first line.",
    },
    "services_running": {
        "what": "Services must be stopped before the image version can change.",
        "next": "Stop the services (`overleaf-toolkit stop`) and run the upgrade again.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
