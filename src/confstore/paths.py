from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_dir as _uc

DEFAULT_FILENAME = "config.json"


def user_config_dir(app_name: str) -> Path:
    return Path(_uc(appname=app_name)).resolve()


def user_config_file(
    app_name: str,
    filename: str = DEFAULT_FILENAME,
    *,
    create: bool = False,
) -> Path:
    """Return the per-user config file *filename* for *app_name*.

    With ``create=True`` the containing directory is created so that a
    file provider accepts the path before the file exists.
    """
    directory = user_config_dir(app_name)
    if create:
        directory.mkdir(parents=True, exist_ok=True)
    return directory / filename
