#!/usr/bin/env python3

import click
import logging
import sys

from taglog.commands.changelog import tags_handler, versions_handler, version_handler


@click.group()
@click.version_option(package_name='taglog')
@click.option('--repo', '-C', 'repo', type=click.Path(exists=True, file_okay=False),
              help='Repository directory (default: current directory)')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Configuration file (JSON, TOML or YAML)')
@click.option('--workers', '-j', type=int, default=1,
              help='Revision ranges to parse concurrently')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, repo, config_path, workers, verbose):
    """taglog - Structured changelogs from git tags and commits.

    Orders tags naturally by name, slices history into one revision range
    per tag and groups each range's commits.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)  # Default to stderr
        ]
    )
    ctx.ensure_object(dict)
    ctx.obj['repo'] = repo
    ctx.obj['config_path'] = config_path
    ctx.obj['workers'] = workers
    ctx.obj['verbose'] = verbose


cli.add_command(tags_handler, name='tags')
cli.add_command(versions_handler, name='versions')
cli.add_command(version_handler, name='version')


def main():
    cli()

if __name__ == "__main__":
    main()
