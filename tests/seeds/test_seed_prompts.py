import json
from pathlib import Path

import pytest

from prompt_store.seeds.seed_prompts import run as run_seed
from prompt_store.models.prompt import Prompt
from prompt_store import db


def write_prompt(tmp_path: Path, name: str, content: str) -> Path:
    d = tmp_path / 'prompts'
    d.mkdir(exist_ok=True)
    p = d / name
    p.write_text(content, encoding='utf-8')
    return d


def titles():
    return sorted(p.title for p in db.session.execute(db.select(Prompt)).scalars())


def test_seed_creates_and_idempotent(app, tmp_path):
    with app.app_context():
        prompts_dir = write_prompt(tmp_path, 'a.md', 'A')
        res = run_seed(app=app, prompts_dir=prompts_dir)
        assert res['created'] == 1
        assert titles() == ['a']

        # Run again (idempotent)
        res2 = run_seed(app=app, prompts_dir=prompts_dir)
        assert res2['created'] == 0
        assert res2['skipped'] == 1
        assert titles() == ['a']


def test_seed_reads_every_json_shape(app, tmp_path):
    with app.app_context():
        write_prompt(tmp_path, '1-single.json', json.dumps({'title': 'single', 'content': 'S'}))
        write_prompt(tmp_path, '2-list.json', json.dumps([
            {'title': 'first', 'content': 'F'},
            {'title': 'second', 'content': 'S2'},
        ]))
        prompts_dir = write_prompt(tmp_path, '3-map.json', json.dumps({'mapped': 'M'}))

        res = run_seed(app=app, prompts_dir=prompts_dir)

        assert res['created'] == 4
        assert [p['title'] for p in res['prompts']] == ['single', 'first', 'second', 'mapped']
        assert titles() == ['first', 'mapped', 'second', 'single']


def test_seed_counts_invalid_entries_and_files(app, tmp_path):
    with app.app_context():
        write_prompt(tmp_path, 'broken.json', '{not json')
        write_prompt(tmp_path, 'empty.json', json.dumps([{'title': '', 'content': 'x'}]))
        write_prompt(tmp_path, 'notes.csv', 'ignored')
        prompts_dir = write_prompt(tmp_path, 'ok.txt', 'fine')

        res = run_seed(app=app, prompts_dir=prompts_dir)

        assert res['created'] == 1
        assert res['invalid'] == 2
        assert titles() == ['ok']


def test_seed_counts_non_text_values_as_invalid(app, tmp_path):
    with app.app_context():
        write_prompt(tmp_path, 'bad.json', json.dumps([
            {'title': ['a'], 'content': 'x'},
            {'title': 'n', 'content': {'nested': True}},
        ]))
        prompts_dir = write_prompt(tmp_path, 'ok.md', 'fine')

        res = run_seed(app=app, prompts_dir=prompts_dir)

        assert res['created'] == 1
        assert res['invalid'] == 2
        assert titles() == ['ok']


def test_seed_missing_directory(app, tmp_path):
    with pytest.raises(FileNotFoundError):
        run_seed(app=app, prompts_dir=tmp_path / 'nope')


def test_packaged_examples_seed_cleanly(app):
    examples = Path(app.root_path) / 'seeds' / 'examples'
    with app.app_context():
        res = run_seed(app=app, prompts_dir=examples)
        assert res['created'] >= 1
        assert res['invalid'] == 0
