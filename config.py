"""Configuration management for Rollcall.

Reads configuration from ~/.config/rollcall.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import List
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    chunk_size: int = 100
    default_roles: List[str] = field(default_factory=lambda: ["authenticated"])
    notify_on_creation: bool = False
    sweep_offsets: List[int] = field(default_factory=lambda: [0, 7])
    sweep_lock_timeout: float = 30.0
    enable_reset: bool = False

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "rollcall"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="rollcall.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "rollcall.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return parse_config(data)


def parse_config(data: dict) -> Config:
    """Build a Config from parsed TOML data, filling in defaults.

    Args:
        data: Dictionary as returned by tomllib.

    Returns:
        Config object.

    Raises:
        ValueError: If a numeric setting is out of range.
    """
    defaults = Config.default()
    base_dir = Path(data.get("base_dir", defaults.base_dir))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", defaults.db_filename)

    log_config = data.get("logging", {})
    log_level = log_config.get("level", defaults.log_level)
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    import_config = data.get("import", {})
    chunk_size = int(import_config.get("chunk_size", defaults.chunk_size))
    default_roles = list(import_config.get("default_roles", defaults.default_roles))
    notify_on_creation = bool(
        import_config.get("notify_on_creation", defaults.notify_on_creation)
    )

    waitlist_config = data.get("waitlist", {})
    sweep_offsets = [
        int(offset)
        for offset in waitlist_config.get("sweep_offsets", defaults.sweep_offsets)
    ]
    sweep_lock_timeout = float(
        waitlist_config.get("sweep_lock_timeout", defaults.sweep_lock_timeout)
    )

    if chunk_size < 1:
        raise ValueError(f"import.chunk_size must be positive, got {chunk_size}")
    if sweep_lock_timeout < 0:
        raise ValueError(
            f"waitlist.sweep_lock_timeout must not be negative, got {sweep_lock_timeout}"
        )

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        chunk_size=chunk_size,
        default_roles=default_roles,
        notify_on_creation=notify_on_creation,
        sweep_offsets=sweep_offsets,
        sweep_lock_timeout=sweep_lock_timeout,
        enable_reset=bool(data.get("enable_reset", defaults.enable_reset)),
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "enable_reset": config.enable_reset,
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "import": {
            "chunk_size": config.chunk_size,
            "default_roles": config.default_roles,
            "notify_on_creation": config.notify_on_creation,
        },
        "waitlist": {
            "sweep_offsets": config.sweep_offsets,
            "sweep_lock_timeout": config.sweep_lock_timeout,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
