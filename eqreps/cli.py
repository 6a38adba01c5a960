#! /usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2023 Jan Sebastian Götte <code@jaseg.de>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

import sys
import warnings
import webbrowser
from pathlib import Path

import click

from . import __version__
from .normalize import normalize
from .postfix import to_postfix, DEFAULT_DELIMITER
from .render import SvgSurface, render as render_tree
from .settings import ParserSettings, RenderSettings
from .tree import build_tree
from .utils import MalformedEquationError, AdjacentGroupWarning, CanvasOverflowWarning


def _showwarning(message, category, filename, lineno, file=None, line=None):
    if file is None:
        file = sys.stderr

    filename = Path(filename)
    eqreps_module_install_location = Path(__file__).parent.parent
    if filename.is_relative_to(eqreps_module_install_location):
        filename = filename.relative_to(eqreps_module_install_location)

    print(f'{filename}:{lineno}: {message}', file=file)
warnings.showwarning = _showwarning

def _print_version(ctx, param, value):
    if value and not ctx.resilient_parsing:
        click.echo(f'Version {__version__}')
        ctx.exit()


class Delimiter(click.ParamType):
    name = 'delimiter'

    def convert(self, value, param, ctx):
        # Allow escapes like "\t" on the command line
        value = value.encode().decode('unicode_escape')
        if not value:
            self.fail('The token delimiter must not be empty.')
        return value


def parser_options(fun):
    fun = click.option('--warnings', 'format_warnings', type=click.Choice(['default', 'ignore', 'once', 'error']),
            default='default', help='''Enable or disable warnings about questionable input (default: on)''')(fun)
    fun = click.option('--fix-all-adjacent-groups/--fix-first-adjacent-group', default=False, help='''Insert an explicit
            multiplication into every ")(" adjacency instead of only the first one (default: first only)''')(fun)
    fun = click.option('--max-depth', type=click.IntRange(min=1), default=200, show_default=True,
            help='Maximum recursion depth of the tree analysis')(fun)
    fun = click.option('--max-length', type=click.IntRange(min=1), default=100, show_default=True,
            help='Maximum length of the equation, both as entered and after normalization')(fun)
    return fun

def _parser_settings(max_length, max_depth, fix_all_adjacent_groups):
    return ParserSettings(max_length=max_length, max_depth=max_depth, fix_all_adjacent_groups=fix_all_adjacent_groups)

def _run(format_warnings, fun, *args):
    with warnings.catch_warnings():
        warnings.simplefilter(format_warnings)
        try:
            return fun(*args)
        # With --warnings=error, warnings surface here as exceptions
        except (MalformedEquationError, AdjacentGroupWarning, CanvasOverflowWarning) as e:
            raise click.ClickException(str(e)) from e


@click.group()
@click.option('--version', is_flag=True, callback=_print_version, expose_value=False, is_eager=True)
def cli():
    """ The eqreps CLI turns infix equations into their postfix notation and into expression tree diagrams. """
    pass


@cli.command('normalize')
@parser_options
@click.argument('equation')
def normalize_cmd(equation, max_length, max_depth, fix_all_adjacent_groups, format_warnings):
    """ Validate an equation, strip whitespace and make implicit multiplications explicit. """
    settings = _parser_settings(max_length, max_depth, fix_all_adjacent_groups)
    click.echo(_run(format_warnings, normalize, equation, settings))


@cli.command()
@parser_options
@click.option('-d', '--delimiter', type=Delimiter(), default=DEFAULT_DELIMITER, help='''Token delimiter. Python escape
              sequences such as "\\t" are recognized. Default: two spaces''')
@click.argument('equation')
def postfix(equation, delimiter, max_length, max_depth, fix_all_adjacent_groups, format_warnings):
    """ Print the postfix (Reverse Polish) notation of an equation. """
    settings = _parser_settings(max_length, max_depth, fix_all_adjacent_groups)
    convert = lambda eq: to_postfix(normalize(eq, settings), delimiter)
    click.echo(_run(format_warnings, convert, equation))


@cli.command()
@parser_options
@click.option('--infix', is_flag=True, help='Print the fully parenthesized infix form instead of an indented tree')
@click.argument('equation')
def tree(equation, infix, max_length, max_depth, fix_all_adjacent_groups, format_warnings):
    """ Print the expression tree of an equation, one node per line. """
    settings = _parser_settings(max_length, max_depth, fix_all_adjacent_groups)
    root = _run(format_warnings, lambda eq: build_tree(normalize(eq, settings), settings), equation)
    if infix:
        click.echo(root.infix())
    else:
        for line in root.dump():
            click.echo(line)


@cli.command()
@parser_options
@click.option('--margin', type=click.FloatRange(min=0, min_open=True), default=65, show_default=True,
              help='Node spacing in pixels')
@click.option('--size', type=(click.IntRange(min=1), click.IntRange(min=1)), default=None, help='''Fixed "WIDTH HEIGHT"
              of the output in pixels. By default, the output is sized to fit the diagram.''')
@click.argument('equation')
@click.argument('outfile', type=click.File('w'), default='-')
def render(equation, outfile, margin, size, max_length, max_depth, fix_all_adjacent_groups, format_warnings):
    """ Render the expression tree diagram of an equation into an SVG file. """
    settings = _parser_settings(max_length, max_depth, fix_all_adjacent_groups)
    render_settings = RenderSettings(margin=margin)

    def draw(eq):
        eq = normalize(eq, settings)
        surface = SvgSurface(size=size, settings=render_settings)
        render_tree(build_tree(eq, settings), surface, label=eq, settings=render_settings)
        return surface.to_svg()

    svg = _run(format_warnings, draw, equation)
    with outfile as f:
        f.write(str(svg))


@cli.command()
@click.option('-h', '--host', default=None, help='Hostname to listen on. Defaults to localhost.')
@click.option('-p', '--port', type=int, default=1337, help='Port to listen on. Defaults to 1337')
@click.option('--open-browser/--no-browser', default=True, help='Open the eq_reps page in a browser when listening on localhost')
def serve(host, port, open_browser):
    ''' Serve the site, including the interactive equation tools, over HTTP '''
    from . import server

    if host is None and open_browser:
        @server.app.before_serving
        async def open_page():
            webbrowser.open_new(f'http://localhost:{port}/projects/eq_reps/')
    server.app.run(host=host, port=port, use_reloader=False, debug=False)


if __name__ == '__main__':
    cli()
