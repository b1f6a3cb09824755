"""Shared fixtures; the environment is pinned before the app is imported."""

import asyncio
import os
from types import SimpleNamespace
from typing import List, Optional, Union

import pytest

os.environ["OPENAI_API_KEY"] = ""
os.environ["RATE_LIMIT_PER_MINUTE"] = "10000"
os.environ["ADVISORY_ENABLED"] = "true"

from promptforge.services.generation_service import GenerationService  # noqa: E402
from promptforge.utils.config import get_settings  # noqa: E402

get_settings.cache_clear()


class FakeGenerationService(GenerationService):
    """Replays scripted outputs; an Exception entry is raised instead."""

    def __init__(self, outputs: List[Union[str, Exception]], delay: float = 0.0):
        self.outputs = list(outputs)
        self.delay = delay
        self.calls = []

    async def generate(self, system_instruction, user_instruction, config, safety_thresholds, model_id=None):
        self.calls.append(
            {
                "system_instruction": system_instruction,
                "user_instruction": user_instruction,
                "model_id": model_id,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        output = self.outputs[len(self.calls) - 1] if len(self.calls) <= len(self.outputs) else ""
        if isinstance(output, Exception):
            raise output
        return output


def make_chat_client(content: Optional[str] = None, error: Optional[Exception] = None):
    """Minimal stand-in for AsyncOpenAI chat completions."""

    async def create(**kwargs):
        create.kwargs = kwargs
        if error is not None:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason="stop")])

    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def long_text():
    return "## Objetivo\nUm aplicativo de tarefas com lembretes, prioridades e sincronização entre dispositivos."
