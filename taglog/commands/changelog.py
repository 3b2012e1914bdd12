"""
Changelog commands for taglog.

    taglog tags              list tags, newest first
    taglog versions [QUERY]  structured versions as JSON
    taglog version [QUERY]   newest selected version as JSON
"""

import click
import json
import logging

from ..api import ChangeLogger
from ..exit_codes import TaglogError, exit_with_code
from ..render import render_tags_table


def _changelogger(ctx: click.Context) -> ChangeLogger:
    obj = ctx.obj or {}
    cl = ChangeLogger(
        repo=obj.get('repo'),
        config_path=obj.get('config_path'),
        workers=obj.get('workers', 1),
    )
    _configure_logging(cl.config.get('logging', {}), obj.get('verbose', False))
    return cl


def _configure_logging(settings: dict, verbose: bool) -> None:
    """Apply the configured level (unless --verbose) and format."""
    if not verbose:
        level = settings.get('level', 'WARNING')
        logging.getLogger('taglog').setLevel(str(level).upper())
    fmt = settings.get('format')
    if fmt:
        formatter = logging.Formatter(fmt)
        for handler in logging.getLogger().handlers:
            handler.setFormatter(formatter)


@click.command('tags')
@click.option('--json', 'output_json', is_flag=True,
              help='Output as JSONL (default: pretty table)')
@click.pass_context
def tags_handler(ctx: click.Context, output_json: bool):
    """
    List tags in version order, newest first.

    \b
    Examples:
        taglog tags
        taglog tags --json | jq '.name'
    """
    try:
        tags = _changelogger(ctx).tags()
    except TaglogError as e:
        exit_with_code(e.exit_code, f"Error: {e}")

    if output_json:
        for tag in tags:
            click.echo(json.dumps(tag.to_dict()))
    else:
        render_tags_table(tags)


@click.command('versions')
@click.argument('query', default='')
@click.option('--indent', type=int, default=2, help='JSON indentation (0 for compact)')
@click.pass_context
def versions_handler(ctx: click.Context, query: str, indent: int):
    """
    Print the versions selected by QUERY as JSON.

    QUERY is a tag name or a range (OLD..NEW, OLD.., ..NEW). With no
    query every tag is included.

    \b
    Examples:
        taglog versions
        taglog versions v1.0.0..v2.0.0
        taglog versions ..v1.0.0
    """
    try:
        versions = _changelogger(ctx).get_changelog(query)
    except TaglogError as e:
        exit_with_code(e.exit_code, f"Error: {e}")

    click.echo(json.dumps([v.to_dict() for v in versions], indent=indent or None))


@click.command('version')
@click.argument('query', default='')
@click.option('--indent', type=int, default=2, help='JSON indentation (0 for compact)')
@click.pass_context
def version_handler(ctx: click.Context, query: str, indent: int):
    """
    Print the newest version selected by QUERY as JSON.

    \b
    Examples:
        taglog version
        taglog version v1.2.0
    """
    try:
        version = _changelogger(ctx).get_version_changelog(query)
    except TaglogError as e:
        exit_with_code(e.exit_code, f"Error: {e}")

    click.echo(json.dumps(version.to_dict(), indent=indent or None))
