"""Shared configuration models for infrastructure components."""

from pydantic import BaseModel, computed_field


class DatabaseConfig(BaseModel, frozen=True):
    """Immutable database connection configuration."""

    host: str
    password: str
    port: str = "5432"
    user: str = "postgres"
    database: str = "transcriptions"

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )
