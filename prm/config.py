"""Personal relationship manager configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class PRMSettings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///prm.db"
    echo_sql: bool = False

    # Public disk (avatars and other user uploads)
    public_storage_dir: str = "data/public"
    public_storage_url: str = "/storage"

    # Gravatar probe; best-effort, never fatal
    gravatar_base_url: str = "https://www.gravatar.com/avatar/"
    gravatar_timeout_seconds: float = 3.0

    # Default avatar palette, comma-separated hex colors
    avatar_colors: str = "#fdb660,#93521e,#bd5067,#b3d5fe,#ff9807,#709512,#5f479a,#e5e5cd"

    model_config = {"env_prefix": "PRM_", "env_file": ".env", "extra": "ignore"}

    @property
    def base_dir(self) -> Path:
        return Path(__file__).resolve().parent

    @property
    def project_dir(self) -> Path:
        return self.base_dir.parent

    @property
    def storage_dir(self) -> Path:
        path = Path(self.public_storage_dir)
        if not path.is_absolute():
            path = self.project_dir / path
        return path

    @property
    def avatar_palette(self) -> list[str]:
        """Parse the comma-separated palette, skipping blanks."""
        return [c.strip() for c in self.avatar_colors.split(",") if c.strip()]


settings = PRMSettings()
