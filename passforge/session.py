"""Per-page generator state.

A :class:`GeneratorSession` owns everything one rendering unit shows: the
current options, the password, the last strength result and any pending
notifications.  Front ends call its setters and render its fields.
"""

from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable

import structlog

from passforge import GenerationConfig, ValidationError, generate_password
from passforge.analyzer import AnalysisError, StrengthResult, analyze_strength

logger = structlog.get_logger(__name__)

_CLASS_FIELDS = {
    "uppercase": "include_uppercase",
    "lowercase": "include_lowercase",
    "numbers": "include_numbers",
    "symbols": "include_symbols",
}


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    destructive: bool = False


@dataclass
class GeneratorSession:
    config: GenerationConfig = field(default_factory=GenerationConfig)
    password: str = ""
    result: StrengthResult | None = None
    analyzing: bool = False
    notifications: list[Notification] = field(default_factory=list)

    # ── Options ────────────────────────────────────────────────────────

    def set_length(self, length: int) -> None:
        if length == self.config.length:
            return
        self.config = replace(self.config, length=length)
        self.regenerate()

    def set_class(self, name: str, enabled: bool) -> None:
        try:
            attr = _CLASS_FIELDS[name]
        except KeyError:
            raise ValueError(f"Unknown character class: {name!r}") from None
        if getattr(self.config, attr) == enabled:
            return
        self.config = replace(self.config, **{attr: enabled})
        self.regenerate()

    # ── Generation ─────────────────────────────────────────────────────

    def regenerate(self) -> str:
        """Replace the password and drop any stale strength result."""
        self.result = None
        try:
            self.password = generate_password(self.config)
        except ValidationError as exc:
            logger.info("generation_rejected", reason=str(exc))
            self.password = ""
            self._notify("Error", "Please select at least one character set.", destructive=True)
        return self.password

    # ── Analysis ───────────────────────────────────────────────────────

    @property
    def can_analyze(self) -> bool:
        return bool(self.password) and not self.analyzing

    async def analyze(
        self,
        analyzer: Callable[[str], Awaitable[StrengthResult]] = analyze_strength,
    ) -> StrengthResult | None:
        if not self.password:
            self._notify(
                "No Password",
                "Generate a password first to analyze its strength.",
                destructive=True,
            )
            return None
        if self.analyzing:
            return None

        self.analyzing = True
        self.result = None
        try:
            self.result = await analyzer(self.password)
        except AnalysisError:
            self._notify(
                "Analysis Error",
                "Could not analyze password strength. Please try again.",
                destructive=True,
            )
        finally:
            self.analyzing = False
        return self.result

    # ── Notifications ──────────────────────────────────────────────────

    def _notify(self, title: str, description: str, destructive: bool = False) -> None:
        self.notifications.append(Notification(title, description, destructive))

    def drain_notifications(self) -> list[Notification]:
        pending, self.notifications = self.notifications, []
        return pending
