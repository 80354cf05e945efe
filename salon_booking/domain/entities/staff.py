from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Staff:
    id: str
    user_id: str
    first_name: str
    last_name: str
    position: str | None = None
    profile_photo_url: str | None = None
    languages: str | None = None  # comma-separated tags, e.g. "en, et, ru"

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def language_list(self) -> list[str]:
        if not self.languages:
            return []
        return [lang.strip() for lang in self.languages.split(",") if lang.strip()]
