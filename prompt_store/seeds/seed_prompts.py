import json
import os
from pathlib import Path
from typing import Optional

import structlog

from prompt_store.extensions import db
from prompt_store.models.prompt import Prompt
from prompt_store.services.prompt_service import ValidationError, get_store, require_text

log = structlog.get_logger()

TEXT_SUFFIXES = ('.md', '.txt')


def _entries_from_json(payload) -> Optional[list]:
    """Resolve the supported JSON shapes into (title, content) pairs.

    1) {"title": "...", "content": "..."}
    2) {"Prompt A": "content A", ...}  (mapping)
    3) [ {"title": "...", "content": "..."}, ... ]

    Returns None for an unsupported shape.
    """
    if isinstance(payload, dict) and 'title' in payload and 'content' in payload:
        return [(payload['title'], payload['content'])]
    if isinstance(payload, dict) and all(isinstance(v, str) for v in payload.values()):
        return list(payload.items())
    if isinstance(payload, list):
        return [
            (item.get('title'), item.get('content'))
            for item in payload
            if isinstance(item, dict)
        ]
    return None


def read_entries(path: Path) -> list:
    """Read one seed file. Raises ValueError for unreadable or unsupported JSON."""
    if path.suffix.lower() == '.json':
        try:
            payload = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise ValueError(f'{path.name}: invalid JSON ({e})') from e
        entries = _entries_from_json(payload)
        if entries is None:
            raise ValueError(f'{path.name}: unsupported JSON shape')
        return entries
    return [(path.stem, path.read_text(encoding='utf-8'))]


def run(app, prompts_dir, create_tables_if_missing: bool = False) -> dict:
    """Seed prompts from a directory into the prompts table.

    Files are processed in name order. ``.json`` files hold one or more
    prompts, ``.md``/``.txt`` files hold a single prompt titled after the
    file stem. A prompt whose exact title and content already exist is
    skipped, so running the seeder twice creates nothing the second time.

    Returns a summary dict: {"created", "skipped", "invalid", "prompts"}.
    """
    prompts_dir = Path(prompts_dir)
    if not prompts_dir.is_dir():
        raise FileNotFoundError(f'Prompts directory not found: {prompts_dir}')

    created = 0
    skipped = 0
    invalid = 0
    seeded = []

    with app.app_context():
        if create_tables_if_missing:
            db.create_all()

        store = get_store()
        for path in sorted(prompts_dir.iterdir()):
            if not path.is_file():
                continue
            if path.suffix.lower() not in ('.json',) + TEXT_SUFFIXES:
                continue
            try:
                entries = read_entries(path)
            except ValueError as e:
                log.warning("seed.file_rejected", path=str(path), error=str(e))
                invalid += 1
                continue

            for title, content in entries:
                # Non-str values cannot be bound in the duplicate lookup
                try:
                    require_text('title', title)
                    require_text('content', content)
                except ValidationError as e:
                    log.warning("seed.entry_rejected", path=str(path), error=str(e))
                    invalid += 1
                    continue

                existing = db.session.execute(
                    db.select(Prompt).filter_by(title=title, content=content)
                ).scalars().first()
                if existing is not None:
                    skipped += 1
                    seeded.append(existing.to_dict())
                    continue
                prompt = store.create(title, content)
                created += 1
                seeded.append(prompt.to_dict())

    log.info("seed.finished", created=created, skipped=skipped, invalid=invalid)
    return {"created": created, "skipped": skipped, "invalid": invalid, "prompts": seeded}


if __name__ == '__main__':
    import sys
    from prompt_store import create_app

    app = create_app(os.getenv('FLASK_CONFIG') or 'default')
    target = sys.argv[1] if len(sys.argv) > 1 else os.path.join(app.root_path, 'seeds', 'examples')
    print(json.dumps(run(app, target, create_tables_if_missing=True), ensure_ascii=False, indent=2))
