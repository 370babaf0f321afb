"""Configuration models for the pivotal_tracker YAML file."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ConfigError(Exception):
    """Configuration could not be loaded or is incomplete."""

    pass


class GeneralConfig(BaseModel):
    """The General section: credentials and defaults."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_key: str | None = Field(default=None, alias="APIKey")
    me: str | None = Field(default=None, alias="Me")
    default_project: str | None = Field(default=None, alias="DefaultProject")


class TrackerConfig(BaseModel):
    """Root configuration model.

    Example:
        General:
          APIKey: abc123
          Me: Alice
          DefaultProject: website
        Projects:
          website: 42
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    general: GeneralConfig = Field(default_factory=GeneralConfig, alias="General")
    projects: dict[str, int] = Field(default_factory=dict, alias="Projects")

    @field_validator("projects")
    @classmethod
    def validate_project_ids(cls, v: dict[str, int]) -> dict[str, int]:
        """Validate project IDs are positive integers."""
        for name, project_id in v.items():
            if project_id <= 0:
                raise ValueError(f"Project '{name}' must have a positive ID, got {project_id}")
        return v

    @model_validator(mode="after")
    def validate_default_project(self) -> "TrackerConfig":
        """Ensure DefaultProject names a configured project."""
        default = self.general.default_project
        if default is not None and default not in self.projects:
            raise ValueError(f"DefaultProject '{default}' is not listed under Projects")
        return self

    @property
    def api_key(self) -> str | None:
        """Shortcut for the API token."""
        return self.general.api_key

    @property
    def me(self) -> str | None:
        """Shortcut for the current user's name."""
        return self.general.me

    @property
    def default_project_id(self) -> int | None:
        """ID of the default project, if one is configured."""
        if self.general.default_project is None:
            return None
        return self.projects[self.general.default_project]

    def resolve_project(self, name: str) -> int:
        """Look up a project ID by its configured name.

        Raises:
            ConfigError: If no project has that name
        """
        try:
            return self.projects[name]
        except KeyError:
            known = ", ".join(sorted(self.projects)) or "none"
            raise ConfigError(f"Unknown project '{name}' (configured: {known})") from None
