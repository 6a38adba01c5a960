#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2022 Jan Sebastian Götte <code@jaseg.de>
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

import importlib.resources
from tempfile import TemporaryDirectory
from pathlib import Path

from quart import Quart, request, Response, jsonify

from . import pages
from .normalize import try_normalize
from .postfix import to_postfix
from .render import SvgSurface, render
from .settings import ParserSettings, RenderSettings
from .tree import build_tree
from .utils import MalformedEquationError


def extract_importlib(package):
    root = TemporaryDirectory()

    stack = [(importlib.resources.files(package), Path(root.name))]
    while stack:
        res, out = stack.pop()

        for item in res.iterdir():
            item_out = out / item.name
            if item.is_file():
                item_out.write_bytes(item.read_bytes())
            elif item.name != '__pycache__':
                item_out.mkdir()
                stack.append((item, item_out))

    return root

static_folder = extract_importlib(pages)
app = Quart(__name__, static_folder=static_folder.name)
app.config.setdefault('EQREPS_PARSER_SETTINGS', ParserSettings())
app.config.setdefault('EQREPS_RENDER_SETTINGS', RenderSettings())


@app.route('/')
async def index():
    return await app.send_static_file('index.html')

@app.route('/blog/')
async def blog():
    return await app.send_static_file('blog.html')

@app.route('/projects/')
async def projects():
    return await app.send_static_file('projects.html')

@app.route('/projects/eq_reps/')
async def eq_reps():
    return await app.send_static_file('eq_reps.html')

@app.route('/resume/')
async def resume():
    return await app.send_static_file('resume.html')


def error_response(err):
    return jsonify({'error': str(err), 'reason': err.reason.name}), 400

async def normalized_request_equation():
    obj = await request.get_json(silent=True)
    equation = obj.get('equation') if isinstance(obj, dict) else None
    if not isinstance(equation, str):
        equation = None
    return try_normalize(equation, app.config['EQREPS_PARSER_SETTINGS'])

@app.route('/projects/eq_reps/postfix', methods=['POST'])
async def postfix():
    res = await normalized_request_equation()
    if not res.ok:
        return error_response(res.error)

    try:
        return jsonify({'equation': res.equation, 'postfix': to_postfix(res.equation)})
    except MalformedEquationError as e:
        return error_response(e)

@app.route('/projects/eq_reps/diagram.svg', methods=['POST'])
async def diagram():
    res = await normalized_request_equation()
    if not res.ok:
        return error_response(res.error)

    try:
        tree = build_tree(res.equation, app.config['EQREPS_PARSER_SETTINGS'])
    except MalformedEquationError as e:
        return error_response(e)

    render_settings = app.config['EQREPS_RENDER_SETTINGS']
    surface = SvgSurface(settings=render_settings)
    render(tree, surface, label=res.equation, settings=render_settings)
    return Response(str(surface.to_svg()), mimetype='image/svg+xml')


if __name__ == '__main__':
    app.run()
