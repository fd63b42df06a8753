import click
import click_log
import json
import logging
import sys

from logging.config import dictConfig

from rdfxml import env
from rdfxml.dictionaries.namespaces import ns_collection
from rdfxml.exceptions import RdfXmlError
from rdfxml.loader import load_from_path
from rdfxml.util.translator import to_graph
from rdfxml.writer.rdf_writer import triples_to_string

__doc__="""
Utility to check and convert RDF/XML documents via console command-line.

The command-line tool is self-documented. Type::

    rdfxml-admin --help

for a list of tools and options.
"""

logger = logging.getLogger(__name__)
click_log.basic_config(logger)


@click.group()
@click.option(
    '--config-folder', '-c', default=None, help='Alternative configuration '
    'folder to look up. If not set, the location set in the environment or '
    'the default configuration is used.')
def admin(config_folder=None):
    if config_folder:
        env.setup(config_folder)
    dictConfig(env.config['logging'])


def _load(fpath):
    try:
        return load_from_path(fpath, namespace_hints=ns_collection())
    except RdfXmlError as e:
        click.echo(click.style(f'{fpath}: {e}', fg='red'), err=True)
        sys.exit(1)


@click.command()
@click.argument('fpath', type=click.Path(exists=True, dir_okay=False))
def check(fpath):
    """
    Parse a document and print a summary as JSON.
    """
    result = _load(fpath)
    click.echo(json.dumps({
        'triples': len(result.triples),
        'subjects': len({trp.subject for trp in result.triples}),
        'namespaces': {
            pfx: str(ns) for pfx, ns in sorted(result.namespaces.items())},
    }))


@click.command()
@click.argument('fpath', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o', default=None, help='Output file. If not specified, '
    'the document is printed to standard output.')
@click.option(
    '--indent', '-i', default=None, help='Indentation string. Defaults to '
    'the configured value.')
def reformat(fpath, output=None, indent=None):
    """
    Parse a document and write it back as RDF/XML.
    """
    result = _load(fpath)
    try:
        out = triples_to_string(result.triples, result.namespaces, indent)
    except RdfXmlError as e:
        click.echo(click.style(str(e), fg='red'), err=True)
        sys.exit(1)

    if output:
        with open(output, 'w', encoding='utf-8') as fh:
            fh.write(out)
        logger.info(f'Output written to {output}')
    else:
        click.echo(out)


@click.command()
@click.argument('fpath', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--format', '-f', 'fmt', default='nt', help='rdflib serialization '
    'format, e.g. ``nt``, ``turtle`` or ``json-ld``.')
def export(fpath, fmt='nt'):
    """
    Convert a document to another RDF serialization with rdflib.
    """
    result = _load(fpath)
    gr = to_graph(result.triples, result.namespaces)
    click.echo(gr.serialize(format=fmt))


admin.add_command(check)
admin.add_command(reformat)
admin.add_command(export)

if __name__ == '__main__':
    admin()
