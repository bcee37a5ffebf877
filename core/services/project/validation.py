from __future__ import annotations

from datetime import date

from core.exceptions import ValidationError

MIN_NAME_LENGTH = 3


class ProjectValidationMixin:
    def _clean_name(self, name: str | None, *, current_id: str | None = None) -> str:
        """Stripped name, unique among projects (case-insensitive)."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("A project needs a name.", code="PROJECT_NAME_EMPTY")
        if len(cleaned) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"Project names need at least {MIN_NAME_LENGTH} characters.",
                code="PROJECT_NAME_TOO_SHORT",
            )
        clash = self.find_project_by_name(cleaned)
        if clash is not None and clash.id != current_id:
            raise ValidationError(
                f"Project name {cleaned!r} is already taken.", code="PROJECT_NAME_DUPLICATE"
            )
        return cleaned

    @staticmethod
    def _check_window(start: date | None, end: date | None) -> None:
        if start is not None and end is not None and end < start:
            raise ValidationError(
                f"Project ends ({end}) before it starts ({start}).", code="PROJECT_INVALID_DATE"
            )


__all__ = ["MIN_NAME_LENGTH", "ProjectValidationMixin"]
