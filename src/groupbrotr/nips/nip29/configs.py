"""Configuration models for the NIP-29 message builders.

See Also:
    [Nip29][groupbrotr.nips.nip29.builders.Nip29]: The builder that consumes
        [Nip29Config][groupbrotr.nips.nip29.configs.Nip29Config].
    [load_yaml()][groupbrotr.core.yaml.load_yaml]: Used by
        [from_yaml()][groupbrotr.nips.nip29.configs.Nip29Config.from_yaml].
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from groupbrotr.core.exceptions import ConfigurationError
from groupbrotr.core.yaml import load_yaml


class Nip29LimitsConfig(BaseModel):
    """Default ``limit`` for each query family when the caller gives none."""

    messages: int = Field(default=50, ge=1, description="get_group_messages")
    reactions: int = Field(default=100, ge=1, description="get_message_reactions")
    membership: int = Field(default=50, ge=1, description="is_member")
    moderation: int = Field(default=100, ge=1, description="get_group_moderation_events")
    join_leave: int = Field(default=50, ge=1, description="get_join_leave_requests")
    group_state: int = Field(
        default=1, ge=1, description="get_group_metadata/admins/members/roles"
    )


class Nip29Config(BaseModel):
    """Settings for [Nip29][groupbrotr.nips.nip29.builders.Nip29].

    Examples:
        ```yaml
        invite_code_length: 12
        subscription_prefix: chat
        limits:
          messages: 200
        ```
    """

    invite_code_length: int = Field(
        default=8,
        ge=4,
        le=64,
        description="Length of generated alphanumeric invite codes",
    )
    subscription_prefix: str = Field(
        default="sub",
        min_length=1,
        description="Prefix of default subscription ids (<prefix>-<ms>)",
    )
    custom_subscription_prefix: str = Field(
        default="custom",
        min_length=1,
        description="Prefix of default subscription ids for query_custom()",
    )
    default_reaction: str = Field(
        default="+",
        min_length=1,
        description="Reaction content used when none is given",
    )
    limits: Nip29LimitsConfig = Field(default_factory=Nip29LimitsConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Nip29Config:
        """Load and validate a config file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the YAML is invalid or fails validation.
        """
        return cls.from_dict(load_yaml(config_path))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Nip29Config:
        """Validate a config mapping, wrapping errors in ``ConfigurationError``."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid nip29 config: {e}") from e
