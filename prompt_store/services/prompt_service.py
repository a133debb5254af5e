from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Optional

import structlog
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from prompt_store.extensions import db, cache
from prompt_store.models.prompt import Prompt, utcnow

log = structlog.get_logger()

ALL_PROMPTS_CACHE_KEY = 'all_prompts'


class PromptStoreError(Exception):
    pass


class ValidationError(PromptStoreError):
    pass


class NotFoundError(PromptStoreError):
    pass


class StorageError(PromptStoreError):
    pass


def require_text(field: str, value) -> str:
    if not isinstance(value, str) or value == '':
        raise ValidationError(f"'{field}' is required and must be a non-empty string")
    return value


def parse_prompt_id(prompt_id) -> uuid.UUID:
    """Accept a UUID or its string form; anything else is a ValidationError."""
    if isinstance(prompt_id, uuid.UUID):
        return prompt_id
    try:
        return uuid.UUID(str(prompt_id))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid prompt id: {prompt_id!r}") from e


class PromptStore:
    """Persist and retrieve Prompt records through an injected session.

    Identifiers and creation timestamps are generated here rather than by
    database defaults, so every engine yields the same records. Each write
    is its own transaction: on a database error the session is rolled back
    and ``StorageError`` is raised with the driver error chained.

    A store instance belongs to one session and therefore one thread.
    """

    def __init__(self, session, cache=None, clock: Optional[Callable[[], datetime]] = None,
                 cache_timeout: int = 3600):
        self.session = session
        self.cache = cache
        self.clock = clock or utcnow
        self.cache_timeout = cache_timeout

    def create(self, title: str, content: str) -> Prompt:
        require_text('title', title)
        require_text('content', content)

        pid = uuid.uuid4()
        prompt = Prompt(id=pid, title=title, content=content, created_at=self.clock())
        self._commit(lambda: self.session.add(prompt), action='create')
        log.info("prompt.created", prompt_id=str(pid))
        return prompt

    def get(self, prompt_id) -> Prompt:
        pid = parse_prompt_id(prompt_id)
        try:
            prompt = self.session.get(Prompt, pid)
        except SQLAlchemyError as e:
            self._fail(e, action='get')
        if prompt is None:
            raise NotFoundError(f"Prompt {pid} not found")
        return prompt

    def list(self) -> list[Prompt]:
        """All prompts, oldest first. Ties on created_at are broken by id."""
        stmt = db.select(Prompt).order_by(Prompt.created_at, Prompt.id)
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError as e:
            self._fail(e, action='list')

    def update(self, prompt_id, title: str, content: str) -> Prompt:
        require_text('title', title)
        require_text('content', content)
        prompt = self.get(prompt_id)
        pid = str(prompt.id)

        def apply():
            prompt.title = title
            prompt.content = content

        self._commit(apply, action='update')
        log.info("prompt.updated", prompt_id=pid)
        return prompt

    def delete(self, prompt_id) -> None:
        prompt = self.get(prompt_id)
        pid = str(prompt.id)
        self._commit(lambda: self.session.delete(prompt), action='delete')
        log.info("prompt.deleted", prompt_id=pid)

    def snapshot(self) -> list[dict]:
        """Serialised listing, served from the cache when one is attached."""
        if self.cache is None:
            return [p.to_dict() for p in self.list()]

        cached = self.cache.get(ALL_PROMPTS_CACHE_KEY)
        if cached is not None:
            return cached
        data = [p.to_dict() for p in self.list()]
        self.cache.set(ALL_PROMPTS_CACHE_KEY, data, timeout=self.cache_timeout)
        return data

    def _commit(self, change: Callable[[], None], action: str):
        try:
            change()
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail(e, action=action)
        if self.cache is not None:
            self.cache.delete(ALL_PROMPTS_CACHE_KEY)

    def _fail(self, exc: SQLAlchemyError, action: str):
        self.session.rollback()
        log.error("prompt.storage_error", action=action, error=str(exc))
        raise StorageError(f"Could not {action} prompt: {exc}") from exc


def get_store() -> PromptStore:
    """Build a store bound to the session of the current application context."""
    return PromptStore(
        db.session,
        cache=cache,
        cache_timeout=current_app.config.get('PROMPT_CACHE_TIMEOUT', 3600),
    )
