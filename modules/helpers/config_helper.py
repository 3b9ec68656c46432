import configparser
import os
from pathlib import Path
from typing import List, Union


class ConfigHelper:
    _config = None
    _config_mtime = None
    _config_path: Path = Path("config/config.ini")

    @classmethod
    def load_config(cls, file_path: Union[str, os.PathLike, None] = None):
        """Load the configuration from ``file_path``.

        The file is read only when it's not cached or when the file has
        changed on disk since the last load, so tweaking opacity or the
        inactivity window does not require a restart.
        """
        path = Path(file_path) if file_path is not None else cls.get_config_path()
        if path != cls._config_path:
            cls._config = None
        cls._config_path = path
        mtime = os.path.getmtime(path) if path.exists() else None

        if cls._config is None or mtime != cls._config_mtime:
            cls._config = configparser.ConfigParser()
            if mtime is not None:
                cls._config.read(str(path), encoding="utf-8")
                cls._config_mtime = mtime
            else:
                print(f"Warning: config file '{path}' not found.")
                cls._config_mtime = None

        return cls._config

    @classmethod
    def get(cls, section, key, fallback=None):
        cls.load_config()
        try:
            return cls._config.get(section, key, fallback=fallback)
        except Exception as e:
            print(f"Config error: [{section}] {key} - {e}")
            return fallback

    @classmethod
    def getboolean(cls, section, key, fallback=False):
        cls.load_config()
        try:
            return cls._config.getboolean(section, key, fallback=fallback)
        except Exception as e:
            print(f"Config error: [{section}] {key} - {e}")
            return fallback

    @classmethod
    def getint(cls, section, key, fallback=0):
        cls.load_config()
        try:
            return cls._config.getint(section, key, fallback=fallback)
        except Exception as e:
            print(f"Config error: [{section}] {key} - {e}")
            return fallback

    @classmethod
    def getfloat(cls, section, key, fallback=0.0):
        cls.load_config()
        try:
            return cls._config.getfloat(section, key, fallback=fallback)
        except Exception as e:
            print(f"Config error: [{section}] {key} - {e}")
            return fallback

    @classmethod
    def getintlist(cls, section, key, fallback=None) -> List[int]:
        """Read a comma separated list of integers, skipping invalid items."""
        raw = cls.get(section, key, fallback=None)
        if raw is None:
            return list(fallback or [])
        values: List[int] = []
        for part in str(raw).split(","):
            part = part.strip()
            if not part:
                continue
            try:
                values.append(int(part))
            except ValueError:
                print(f"Config error: [{section}] {key} - ignoring '{part}'")
        return values or list(fallback or [])

    @classmethod
    def get_config_path(cls) -> Path:
        if not isinstance(cls._config_path, Path):
            cls._config_path = Path("config/config.ini")
        return cls._config_path


# Late import to avoid circular dependency with logging_helper
from modules.helpers.logging_helper import log_module_import

log_module_import(__name__)
