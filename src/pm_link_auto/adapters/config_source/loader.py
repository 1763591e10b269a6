"""Locate, evaluate and create pm-link-auto configuration files."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from pm_link_auto.adapters.manifest import find_nearest_manifest
from pm_link_auto.config.errors import ConfigurationError
from pm_link_auto.config.linker import CONFIG_FILENAMES, DEFAULT_CONFIG_FILENAME, LinkerConfig

from .evaluate import evaluate_default_export
from .syntax import dialect_for

if TYPE_CHECKING:
    from pm_link_auto.domain.ports import ConfirmationPrompt

log = getLogger(__name__)

TEMPLATE_NAME: Final[str] = f"{DEFAULT_CONFIG_FILENAME}.template"


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    config: LinkerConfig
    path: Path


def find_config_file(start: Path) -> Path | None:
    """Nearest config file in ``start`` or its parents; ``.ts`` wins over ``.js``."""

    start = start.absolute()
    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
    return None


def load_config_file(path: Path) -> LoadedConfig:
    source = path.read_bytes().decode("utf-8")
    data = evaluate_default_export(source, dialect=dialect_for(path), path=str(path))
    try:
        config = LinkerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc
    return LoadedConfig(config=config, path=path)


def load_config(start: Path) -> LoadedConfig | None:
    path = find_config_file(start)
    if path is None:
        return None
    loaded = load_config_file(path)
    log.info("✓ Using configuration file: %s", path)
    return loaded


def create_default_config(project_dir: Path) -> Path:
    """Write the bundled template as ``project_dir/pm-link-auto.config.ts``."""

    target = project_dir / DEFAULT_CONFIG_FILENAME
    template = resources.files("pm_link_auto.config") / "templates" / TEMPLATE_NAME
    target.write_text(template.read_text(encoding="utf-8"), encoding="utf-8")
    return target


def offer_default_config(start: Path, confirm: ConfirmationPrompt) -> Path | None:
    """Ask to create a config file next to the project's ``package.json``.

    Returns the created file, or ``None`` when the user declined or no project
    could be found.
    """

    log.warning("Could not find a configuration file for pm-link-auto.")
    should_create = confirm(
        f"Would you like to create a default `{DEFAULT_CONFIG_FILENAME}` file "
        "in your project root?",
        default=True,
    )
    if not should_create:
        log.info(
            "Okay. To use this tool, please create a `%s` file manually in your project root.",
            DEFAULT_CONFIG_FILENAME,
        )
        return None

    manifest = find_nearest_manifest(start)
    if manifest is None:
        log.error(
            "Could not find a 'package.json' in %s or any parent directory. "
            "Please run this command from within your project.",
            start,
        )
        return None

    created = create_default_config(manifest.parent)
    log.info("✓ Successfully created `%s` at %s", DEFAULT_CONFIG_FILENAME, created)
    log.info(
        "Please edit this file to configure your linked packages and then run the command again."
    )
    return created
