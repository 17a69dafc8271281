"""CLI interface for exiftiff — dump and makernote subcommands."""

import json
import sys
from pathlib import Path

import click

import exiftiff
from exiftiff import log
from exiftiff.config import DecoderConfig
from exiftiff.errors import TiffError
from exiftiff.mknote import default_registry, locate_maker_note
from exiftiff.tiff import SectionReader, decode


def _load_config(config_path):
    if config_path:
        return DecoderConfig.from_json(config_path)
    return DecoderConfig.default()


def _fail(err):
    click.echo(log.cli_error(f'Error: {err}'), err=True)
    sys.exit(1)


def _tag_record(tag):
    return {
        'id': tag.id,
        'name': tag.name,
        'type': tag.type_name,
        'count': tag.count,
        'value': tag.to_json(),
    }


@click.group()
@click.version_option(version=exiftiff.__version__, prog_name='exiftiff')
@click.option('--debug', is_flag=True, help='Log skipped tags and IFDs to stderr.')
def main(debug):
    """exiftiff — decode TIFF/BigTIFF directory structures.

    Reads the IFD chain of a TIFF file (or a TIFF block embedded in
    another file) and prints the tags of every directory.
    """
    if debug:
        log.enable_debug_logging()


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--offset', type=int, default=0, show_default=True,
              help='Byte offset of the TIFF header inside the file.')
@click.option('--config', 'config_path', type=click.Path(exists=True),
              help='Decoder settings JSON (cycle_guard, max_ifds).')
@click.option('--json-out', type=click.Path(), help='Write the decoded tags as JSON to file.')
def dump(path, offset, config_path, json_out):
    """Print every IFD and tag of a TIFF file."""
    try:
        config = _load_config(config_path)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        _fail(f'invalid config {config_path}: {e}')
    filepath = Path(path)

    with open(filepath, 'rb') as fh:
        try:
            tiff = decode(SectionReader(fh, offset), config)
        except TiffError as e:
            _fail(e)

    variant = 'BigTIFF' if tiff.is_big else 'TIFF'
    click.echo(f'File: {filepath.name}')
    click.echo(f'Format: {variant}, {tiff.byte_order} endian, '
               f'{len(tiff.dirs)} IFD(s)')

    for i, d in enumerate(tiff.dirs):
        click.echo(log.cli_header(f'\nIFD{i}: {len(d.tags)} tag(s)'))
        for tag in d.tags:
            label = log.cli_dim(f'0x{tag.id:04x}')
            click.echo(f'  {label} {tag.name} {tag.type_name}[{tag.count}] = '
                       f'{_preview(str(tag))}')

    if json_out:
        data = [[_tag_record(t) for t in d.tags] for d in tiff.dirs]
        with open(json_out, 'w') as f:
            json.dump(data, f, indent=2)
        click.echo(log.cli_info(f'Results written to {json_out}'))


def _preview(text, limit=80):
    if len(text) <= limit:
        return text
    return text[:limit - 3] + '...'


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--offset', type=int, default=0, show_default=True,
              help='Byte offset of the TIFF header inside the file.')
def makernote(path, offset):
    """Report which vendor parser claims the file's MakerNote tag."""
    registry = default_registry()

    with open(path, 'rb') as fh:
        stream = SectionReader(fh, offset)
        try:
            tiff = decode(stream)
            tag = locate_maker_note(stream, tiff)
        except TiffError as e:
            _fail(e)

    if tag is None:
        click.echo(log.cli_warning('No MakerNote tag found'))
        return

    parser = registry.find(tag)
    if parser is None:
        click.echo(log.cli_warning(f'MakerNote ({tag.count} bytes): no registered parser'))
        return

    try:
        note = parser.parse(tag)
    except TiffError as e:
        _fail(e)

    tag_count = sum(len(d.tags) for d in note.dirs)
    click.echo(log.cli_success(f'MakerNote ({tag.count} bytes): {parser.name}, '
                               f'{tag_count} tag(s)'))


if __name__ == '__main__':
    main()
