"""
Productivity Dashboard — Intent payloads.

Pydantic models validating the fields a caller submits when creating a
task or a note. Collections catch ``ValidationError`` and turn it into a
rejected (no-op) intent.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, field_validator

from src.data.models import UNTITLED_NOTE, Priority


def clean_tag(raw: str) -> str | None:
    """Return the trimmed tag, or None if it is empty or contains whitespace."""
    tag = raw.strip()
    if not tag or any(ch.isspace() for ch in tag):
        return None
    return tag


def clean_tags(raw_tags: list[str] | tuple[str, ...]) -> list[str]:
    """Drop invalid tags and duplicates, keeping first-seen order."""
    tags: list[str] = []
    for raw in raw_tags:
        tag = clean_tag(raw)
        if tag is not None and tag not in tags:
            tags.append(tag)
    return tags


class TaskInput(BaseModel):
    """Fields of a new or edited task.

    JSON example:
    {
        "title": "Buy milk",
        "description": "",
        "due_date": "2024-01-14",
        "priority": "medium"
    }
    """
    title: str
    description: str = ""
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM
    completed: bool = False

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title must not be empty")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v: str | None) -> str:
        return (v or "").strip()

    @field_validator("due_date", mode="before")
    @classmethod
    def empty_due_date(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class NoteInput(BaseModel):
    """Fields of a new note. Blank titles fall back to "Untitled Note"."""
    title: str = ""
    content: str = ""
    tags: list[str] = []
    is_favorite: bool = False

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v: str | None) -> str:
        v = (v or "").strip()
        return v or UNTITLED_NOTE

    @field_validator("tags", mode="before")
    @classmethod
    def sanitize_tags(cls, v: list[str] | tuple[str, ...] | None) -> list[str]:
        return clean_tags(list(v or []))
