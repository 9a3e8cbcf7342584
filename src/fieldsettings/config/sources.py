"""Loading default documents from YAML files.

Owning records usually keep their default settings next to the code
that defines them. load_defaults_file() reads such a file with the
PyYAML safe loader. JSON files load too, since JSON is valid YAML.
"""

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import fieldsettings.errors as errors

_logger = _logging.getLogger(__name__)


class DefaultsFileError(errors.ConfigurationError):
    """Error loading or parsing a defaults file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in defaults file {path}: {message}")


def load_defaults_file(path: str | _pathlib.Path) -> dict[str, _typing.Any]:
    """
    Load a YAML file and return its contents as a default document.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed contents, or an empty dict if the file is empty.

    Raises:
        DefaultsFileError: If the file is missing, cannot be read, is
            malformed YAML, or contains non-dict content at the top level.
    """
    path = _pathlib.Path(path)

    if not path.exists():
        raise DefaultsFileError(path, "file not found")

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise DefaultsFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise DefaultsFileError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise DefaultsFileError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        _logger.debug("Defaults file %s is empty", path)
        return {}

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise DefaultsFileError(
            path,
            f"defaults must be a YAML mapping (dict), got {type_name}",
        )

    return parsed
