"""Configuration management for etagcheck."""
import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

try:
    import tomli
except ImportError:
    import tomllib as tomli


MIB = 1024 * 1024


class GeneralConfig(BaseModel):
    log_level: str = "INFO"


class HashingConfig(BaseModel):
    algorithm: str = "md5"
    default_block_size: int = Field(default=8 * MIB, gt=0)
    min_inferred_block_size: int = Field(default=MIB, gt=0)  # inference search start
    read_size: int = Field(default=MIB, gt=0)  # max bytes per read() call


class WorkersConfig(BaseModel):
    max_workers: Optional[int] = Field(default=None, gt=0)
    sequential: bool = False


class Config(BaseSettings):
    general: GeneralConfig = Field(default_factory=GeneralConfig)
    hashing: HashingConfig = Field(default_factory=HashingConfig)
    workers: WorkersConfig = Field(default_factory=WorkersConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load config from TOML file or use defaults."""
        if config_path is None:
            config_path = Path.home() / ".config" / "etagcheck" / "config.toml"
        
        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomli.load(f)
            return cls(**data)
        return cls()

    def get_max_workers(self) -> int:
        """Worker limit, defaulting to one less than the available CPUs."""
        if self.workers.max_workers is not None:
            return self.workers.max_workers
        return max(1, (os.cpu_count() or 1) - 1)


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def set_config(config: Config) -> None:
    """Set the global config instance."""
    global _config
    _config = config
