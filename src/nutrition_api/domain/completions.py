"""Models for language-model completions."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompletionResult:
    """Content and diagnostics of a single chat completion."""

    content: str | None
    finish_reason: str | None = None
    model: str | None = None
    usage: dict[str, object] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        """Return total tokens reported by the provider, or zero."""
        value = self.usage.get("total_tokens")
        return value if isinstance(value, int) else 0
