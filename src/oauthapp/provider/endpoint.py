"""
Endpoint Templates

Endpoint URL templates with named placeholders (e.g. an Azure AD tenant).
Placeholders are resolved in three tiers: a value bound from provider
configuration is final, otherwise a per-call provider option is used when
the placeholder allows it, otherwise the placeholder's fallback.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, model_validator

from oauthapp.provider.models import AuthStyle, Endpoint


class Placeholder(BaseModel):
    """Named variable embedded in an endpoint URL template."""

    name: str = Field(..., description="Placeholder name as written in the template")
    fallback: str = Field(..., description="Value used when neither configuration nor call sets it")
    overridable: bool = Field(
        default=True,
        description="Whether a per-call provider option may set it",
    )

    model_config = ConfigDict(frozen=True)


class EndpointTemplate(BaseModel):
    """Provider endpoint description, possibly parameterized by placeholders."""

    auth_url: str | None = Field(None, description="Authorization URL template")
    token_url: str = Field(..., description="Token URL template")
    auth_style: AuthStyle = Field(default=AuthStyle.IN_PARAMS, description="Client authentication style")
    auth_url_params: dict[str, str] = Field(
        default_factory=dict,
        description="Default query parameters for authorization URLs",
    )
    placeholders: tuple[Placeholder, ...] = Field(default=(), description="Template placeholders")
    bound: dict[str, str] = Field(
        default_factory=dict,
        description="Placeholder values fixed by provider configuration",
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_bound(self) -> EndpointTemplate:
        names = {placeholder.name for placeholder in self.placeholders}
        unknown = set(self.bound) - names
        if unknown:
            raise ValueError(f"unknown placeholders: {', '.join(sorted(unknown))}")
        return self

    def bind(self, values: Mapping[str, str | None]) -> EndpointTemplate:
        """
        Fix placeholder values from provider configuration.

        Empty or None values leave the placeholder unbound.

        Args:
            values: Placeholder values keyed by placeholder name

        Returns:
            New template with the values bound
        """
        bound = dict(self.bound)
        for name, value in values.items():
            if value:
                bound[name] = value
        return EndpointTemplate(**{**self.model_dump(), "bound": bound})

    def resolve(self, provider_options: Mapping[str, str] | None = None) -> Endpoint:
        """
        Resolve the template into a concrete endpoint for one call.

        Args:
            provider_options: Per-call provider options

        Returns:
            Resolved endpoint
        """
        if not self.placeholders:
            return Endpoint(
                auth_url=self.auth_url,
                token_url=self.token_url,
                auth_style=self.auth_style,
                auth_url_params=self.auth_url_params,
            )

        provider_options = provider_options or {}
        values: dict[str, str] = {}
        for placeholder in self.placeholders:
            value = self.bound.get(placeholder.name)
            if value is None and placeholder.overridable:
                value = provider_options.get(placeholder.name) or None
            if value is None:
                value = placeholder.fallback
            values[placeholder.name] = quote(value, safe="")

        return Endpoint(
            auth_url=self.auth_url.format_map(values) if self.auth_url else None,
            token_url=self.token_url.format_map(values),
            auth_style=self.auth_style,
            auth_url_params=self.auth_url_params,
        )
