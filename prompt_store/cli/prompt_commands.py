import json
import os

import click

from prompt_store.seeds.seed_prompts import run as run_seed
from prompt_store.services.prompt_service import PromptStoreError, get_store


def _echo_json(data):
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _read_content(content):
    # "-" means read the body from stdin
    if content == '-':
        return click.get_text_stream('stdin').read()
    return content


def init_prompt_commands(app):
    """Register the `flask prompts ...` command group on the given app."""

    @app.cli.group('prompts')
    def prompts():
        """Create, inspect and remove stored prompts."""

    @prompts.command('create')
    @click.option('--title', required=True, help='Prompt title')
    @click.option('--content', required=True, help='Prompt body, or "-" to read it from stdin')
    def create_prompt(title, content):
        """Store a new prompt and print it as JSON."""
        try:
            prompt = get_store().create(title, _read_content(content))
        except PromptStoreError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(prompt.to_dict())

    @prompts.command('list')
    @click.option('--out-file', default=None, help='Write the listing to this JSON file instead of stdout')
    def list_prompts(out_file):
        """List all prompts, oldest first."""
        try:
            data = get_store().snapshot()
        except PromptStoreError as e:
            raise click.ClickException(str(e)) from e
        if out_file:
            try:
                with open(out_file, 'w', encoding='utf-8') as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
            except OSError as e:
                raise click.ClickException(f'Failed to write out-file: {e}') from e
            click.echo(f'Wrote {len(data)} prompts to: {out_file}')
        else:
            _echo_json(data)

    @prompts.command('show')
    @click.argument('prompt_id')
    def show_prompt(prompt_id):
        """Print one prompt."""
        try:
            prompt = get_store().get(prompt_id)
        except PromptStoreError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(prompt.to_dict())

    @prompts.command('update')
    @click.argument('prompt_id')
    @click.option('--title', required=True, help='New title')
    @click.option('--content', required=True, help='New body, or "-" to read it from stdin')
    def update_prompt(prompt_id, title, content):
        """Replace the title and content of a prompt."""
        try:
            prompt = get_store().update(prompt_id, title, _read_content(content))
        except PromptStoreError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(prompt.to_dict())

    @prompts.command('delete')
    @click.argument('prompt_id')
    def delete_prompt(prompt_id):
        """Delete a prompt."""
        try:
            get_store().delete(prompt_id)
        except PromptStoreError as e:
            raise click.ClickException(str(e)) from e
        click.echo(f'Deleted prompt {prompt_id}')

    @prompts.command('seed')
    @click.option('--prompts-dir', default=None, help='Directory containing prompt files (defaults to the packaged examples)')
    @click.option('--create-tables', is_flag=True, default=False, help='Create DB tables if missing')
    def seed_prompts(prompts_dir, create_tables):
        """Seed prompts from a directory of .json/.md/.txt files."""
        if prompts_dir is None:
            prompts_dir = os.path.join(app.root_path, 'seeds', 'examples')
        try:
            res = run_seed(app=app, prompts_dir=prompts_dir, create_tables_if_missing=create_tables)
        except FileNotFoundError as e:
            raise click.ClickException(str(e)) from e
        _echo_json({k: res[k] for k in ('created', 'skipped', 'invalid')})
