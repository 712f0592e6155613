"""Story prompt definitions and lookup."""

from dataclasses import dataclass, field
from typing import Any, Mapping, TypeAlias

from fabula.errors import ResourceError
from fabula.text import TextContext


@dataclass
class Choice:
    """One player-selectable response inside a prompt."""

    response: str
    jump: str | None = None
    requires: list[str] = field(default_factory=list)
    applies: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Choice":
        if "response" not in payload:
            raise ValueError("Choice missing required field: response")
        jump = payload.get("jump")
        return cls(
            response=str(payload["response"]),
            jump=None if jump is None else str(jump),
            requires=[str(note) for note in payload.get("requires", [])],
            applies=[str(note) for note in payload.get("applies", [])],
        )

    def is_available(self, notes: set[str]) -> bool:
        return all(note in notes for note in self.requires)


@dataclass
class PromptDef:
    """A story prompt: display content plus the choices leading out of it."""

    content: str
    choices: list[Choice] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PromptDef":
        if "content" not in payload:
            raise ValueError("Prompt missing required field: content")
        raw_choices = payload.get("choices", [])
        if not isinstance(raw_choices, list):
            raise ValueError("Prompt 'choices' must be an array")
        return cls(
            content=str(payload["content"]),
            choices=[Choice.from_dict(choice) for choice in raw_choices],
        )

    def debug_info(
        self,
        name: str,
        file: str,
        prompts: "PromptFiles",
        notes: set[str],
        text_context: TextContext,
    ) -> str:
        """Describe this prompt for debugging: content, choices, and jump targets."""
        lines = [
            f"Prompt '{name}' in '{file}'",
            "Content:",
            f"  {text_context.get(self.content)}",
        ]

        if not self.choices:
            lines.append("Choices: none (ending)")
            return "\n".join(lines)

        lines.append("Choices:")
        for i, choice in enumerate(self.choices, 1):
            lines.append(f"  {i}. {text_context.get(choice.response)}")

            if choice.jump is None:
                lines.append("     jump: none")
            else:
                target_file, target_prompt = split_jump(choice.jump, file)
                exists = target_prompt in prompts.get(target_file, {})
                status = "ok" if exists else "MISSING"
                lines.append(f"     jump: {target_file}:{target_prompt} ({status})")

            if choice.requires:
                state = "available" if choice.is_available(notes) else "locked"
                lines.append(f"     requires: {', '.join(choice.requires)} ({state})")
            if choice.applies:
                lines.append(f"     applies: {', '.join(choice.applies)}")

        return "\n".join(lines)


# prompt file name -> prompt name -> prompt definition
PromptFiles: TypeAlias = dict[str, dict[str, PromptDef]]


def split_jump(jump: str, current_file: str) -> tuple[str, str]:
    """Split a 'file:prompt' or bare 'prompt' jump into (file, prompt)."""
    file, sep, prompt = jump.partition(":")
    if not sep:
        return current_file, jump
    return file, prompt


def get_file(prompts: PromptFiles, file: str) -> dict[str, PromptDef]:
    """Return all prompts in a prompt file."""
    prompt_file = prompts.get(file)
    if prompt_file is None:
        raise ResourceError(f"Invalid prompt file '{file}'")
    return prompt_file


def get_prompt(prompts: PromptFiles, name: str, file: str) -> PromptDef:
    """Return one prompt by name within a prompt file."""
    prompt = get_file(prompts, file).get(name)
    if prompt is None:
        raise ResourceError(f"Invalid prompt '{name}' in '{file}'")
    return prompt
