"""Tests for the generation and repair pipeline."""

import pytest

from conftest import ScriptedProvider, compliant_script, episode_json
from flexminute.errors import GenerationError, ProviderError
from flexminute.generation.banks import CTA, SHOW_NAME
from flexminute.generation.pipeline import (
    DEFAULT_TEMPERATURE,
    REPAIR_TEMPERATURE,
    episode_for_date,
    generate_episode,
)
from flexminute.generation.prompts import REPAIR_SYSTEM_PROMPT, SYSTEM_PROMPT
from flexminute.generation.selector import select
from flexminute.generation.spec import ShowFormat
from flexminute.providers.mock import MockProvider


@pytest.fixture
def selection():
    return select("2024-03-05")


def _no_expert_script() -> str:
    return compliant_script().replace("EXPERT:", "HOST:")


class TestHappyPath:
    def test_single_call_when_compliant(self, selection) -> None:
        provider = ScriptedProvider(episode_json())
        episode = generate_episode(provider, selection)
        assert len(provider.calls) == 1
        assert provider.calls[0]["system"] == SYSTEM_PROMPT
        assert provider.calls[0]["temperature"] == DEFAULT_TEMPERATURE
        assert episode.hook == "You paid it off and your score dropped."

    def test_prompt_carries_selection(self, selection) -> None:
        provider = ScriptedProvider(episode_json())
        generate_episode(provider, selection, extra_instructions="Mention the 2-cycle rule.")
        prompt = provider.calls[0]["prompt"]
        assert selection.topic in prompt
        assert selection.spin in prompt
        assert selection.yesterday_topic in prompt
        assert "date_key: 2024-03-05" in prompt
        assert CTA in prompt
        assert prompt.endswith("Mention the 2-cycle rule.")

    def test_speaker_tones_come_from_show_format(self, selection) -> None:
        provider = ScriptedProvider(episode_json())
        show = ShowFormat(speaker_tones={"HOST": "hype", "EXPERT": "calm"})
        generate_episode(provider, selection, show=show)
        prompt = provider.calls[0]["prompt"]
        assert "- HOST tone: hype." in prompt
        assert "- EXPERT tone: calm." in prompt

    def test_topic_and_cta_are_overwritten(self, selection) -> None:
        provider = ScriptedProvider(episode_json(topic="Crypto tips", cta="Link in bio https://x.y"))
        episode = generate_episode(provider, selection)
        assert episode.topic == selection.topic
        assert episode.cta == CTA

    def test_links_are_scrubbed(self, selection) -> None:
        provider = ScriptedProvider(episode_json(hook="Try www.credflex.app", aha_moment="See https://a.b/c now"))
        episode = generate_episode(provider, selection)
        assert episode.hook == "Try"
        assert episode.aha_moment == "See now"

    def test_title_is_normalized(self, selection) -> None:
        provider = ScriptedProvider(episode_json(title="Statement dates 📅📅"))
        episode = generate_episode(provider, selection)
        assert episode.title.startswith(f"{SHOW_NAME}: Statement dates ")
        assert len(set(episode.title[-3:])) == 3


class TestPrimaryFailure:
    def test_provider_error_becomes_generation_error(self, selection) -> None:
        provider = ScriptedProvider(ProviderError("connection reset"))
        with pytest.raises(GenerationError, match="connection reset"):
            generate_episode(provider, selection)
        assert len(provider.calls) == 1


class TestMalformedOutput:
    def test_not_json_falls_back_without_repair(self, selection) -> None:
        provider = ScriptedProvider("not json")
        episode = generate_episode(provider, selection)
        assert len(provider.calls) == 1
        assert episode.script == "not json"
        assert episode.title.startswith(SHOW_NAME)
        assert episode.cta == CTA
        assert episode.topic == selection.topic

    def test_missing_field_falls_back(self, selection) -> None:
        provider = ScriptedProvider('{"title": "x", "hook": "y"}')
        episode = generate_episode(provider, selection)
        assert episode.script == '{"title": "x", "hook": "y"}'
        assert episode.hook == ""


class TestRepair:
    def test_repair_replaces_noncompliant_output(self, selection) -> None:
        first = episode_json(script=_no_expert_script())
        provider = ScriptedProvider(first, episode_json(hook="Repaired hook."))
        episode = generate_episode(provider, selection)

        assert len(provider.calls) == 2
        repair_call = provider.calls[1]
        assert repair_call["system"] == REPAIR_SYSTEM_PROMPT
        assert repair_call["temperature"] == REPAIR_TEMPERATURE
        assert first in repair_call["prompt"]
        assert '"script" has no line starting with "EXPERT:"' in repair_call["prompt"]
        assert episode.hook == "Repaired hook."
        assert episode.script == compliant_script()

    def test_repair_happens_at_most_once(self, selection) -> None:
        bad = episode_json(script=_no_expert_script())
        provider = ScriptedProvider(bad, bad, episode_json())
        episode = generate_episode(provider, selection)
        assert len(provider.calls) == 2
        assert episode.script.splitlines()[-1] == f"HOST: {CTA}"

    def test_forced_compliance_after_failed_repair(self, selection) -> None:
        no_cta = "HOST: Short one.\nHOST: Still no expert."
        provider = ScriptedProvider(episode_json(script=no_cta))
        episode = generate_episode(provider, selection)
        assert len(provider.calls) == 2
        assert episode.script == f"{no_cta}\nHOST: {CTA}"

    def test_forced_compliance_uses_closing_speaker(self, selection) -> None:
        provider = ScriptedProvider(episode_json(script="HOST: hi"))
        episode = generate_episode(provider, selection, show=ShowFormat(closing_speaker="EXPERT"))
        assert episode.script.splitlines()[-1] == f"EXPERT: {CTA}"

    def test_blank_hook_is_accepted_after_repair(self, selection) -> None:
        provider = ScriptedProvider(episode_json(hook=""))
        episode = generate_episode(provider, selection)
        assert len(provider.calls) == 2
        assert episode.hook == ""
        assert episode.script == compliant_script()

    def test_repair_transport_failure_keeps_first_output(self, selection) -> None:
        first = episode_json(script="EXPERT: only me", hook="Original hook.")
        provider = ScriptedProvider(first, ProviderError("timeout"))
        episode = generate_episode(provider, selection)
        assert episode.hook == "Original hook."
        assert episode.script == f"EXPERT: only me\nHOST: {CTA}"

    def test_unparseable_repair_keeps_first_output(self, selection) -> None:
        provider = ScriptedProvider(episode_json(script="EXPERT: only me"), "sorry, I can't")
        episode = generate_episode(provider, selection)
        assert episode.script == f"EXPERT: only me\nHOST: {CTA}"
        assert episode.topic == selection.topic

    def test_repaired_output_is_sanitized(self, selection) -> None:
        provider = ScriptedProvider(
            episode_json(script=_no_expert_script()),
            episode_json(topic="other", hook="Visit https://evil.example now"),
        )
        episode = generate_episode(provider, selection)
        assert episode.topic == selection.topic
        assert episode.hook == "Visit now"


class TestEpisodeForDate:
    def test_uses_selection_for_date(self) -> None:
        episode = episode_for_date(MockProvider(), "2024-03-05")
        assert episode.topic == select("2024-03-05").topic
        assert episode.cta == CTA
        assert episode.script.splitlines()[-1] == f"HOST: {CTA}"
