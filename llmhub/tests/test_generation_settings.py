"""Tests for the generation parameter resolver."""

from __future__ import annotations

from llmhub.base.models import GenerationParams
from llmhub.base.repositories.generation import GenerationSettingsResolver
from llmhub.persistence.interfaces.repos import ModelSettings


def test_defaults_when_no_row(uow):
    params = GenerationSettingsResolver(uow.model_settings).resolve("u1", "openai", "gpt-4o-mini")
    assert params.to_dict() == {  # nosec B101
        "temperature": 0.7,
        "max_tokens": 2048,
        "top_p": 1.0,
        "frequency_penalty": 0.0,
        "presence_penalty": 0.0,
        "system_prompt": "",
    }


def test_stored_row_is_used_as_is(uow):
    with uow:
        uow.model_settings.save(
            ModelSettings(
                user_id="u1",
                provider="anthropic",
                model="claude-3-haiku",
                temperature=0.2,
                max_tokens=512,
                top_p=0.9,
                frequency_penalty=0.1,
                presence_penalty=0.3,
                system_prompt="terse",
            )
        )
    resolver = GenerationSettingsResolver(uow.model_settings)
    assert resolver.resolve("u1", "Anthropic", "claude-3-haiku") == GenerationParams(  # nosec B101
        temperature=0.2,
        max_tokens=512,
        top_p=0.9,
        frequency_penalty=0.1,
        presence_penalty=0.3,
        system_prompt="terse",
    )
    # Other users and other models still get the defaults.
    assert resolver.resolve("u2", "anthropic", "claude-3-haiku") == GenerationParams()  # nosec B101
    assert resolver.resolve("u1", "anthropic", "claude-3-opus") == GenerationParams()  # nosec B101
