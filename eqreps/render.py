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

import math
import warnings
from dataclasses import dataclass

from .settings import RenderSettings
from .normalize import normalize
from .tree import Operator, build_tree
from .utils import Tag, Text, CanvasOverflowWarning, setup_svg

prec = lambda x: f'{float(x):.6}'


class Surface:
    """ Drawing surface the tree renderer draws onto. Subclass this to draw onto something other than SVG. """

    def arc(self, x, y, r, start=0, end=2*math.pi):
        """ Stroke a circular arc around ``(x, y)`` from angle ``start`` to ``end`` (radians). """
        raise NotImplementedError()

    def line(self, x1, y1, x2, y2):
        raise NotImplementedError()

    def text(self, x, y, text):
        """ Draw ``text`` with its baseline starting at ``(x, y)``. """
        raise NotImplementedError()

    @property
    def size(self):
        """ ``(width, height)`` of this surface, or ``None`` if it is unbounded. """
        raise NotImplementedError()


class SvgSurface(Surface):
    """ Records drawing calls as SVG tags.

    :param size: ``(width, height)`` of the surface. When ``None``, the surface grows to fit everything drawn onto it.
    """

    def __init__(self, size=None, settings=None, tag=Tag):
        self.settings = settings or RenderSettings()
        self.tag = tag
        self.tags = []
        self._size = size
        self._extent = (0, 0)

    def _extend(self, x, y):
        self._extent = max(self._extent[0], x), max(self._extent[1], y)

    def arc(self, x, y, r, start=0, end=2*math.pi):
        self._extend(x+r, y+r)
        attrs = dict(fill='none', stroke=self.settings.stroke)

        if math.isclose(abs(end - start), 2*math.pi):
            self.tags.append(self.tag('circle', cx=prec(x), cy=prec(y), r=prec(r), **attrs))
            return

        x1, y1 = x + r*math.cos(start), y + r*math.sin(start)
        x2, y2 = x + r*math.cos(end), y + r*math.sin(end)
        large_arc = int(abs(end - start) > math.pi)
        sweep_flag = int(end > start)
        d = f'M {prec(x1)} {prec(y1)} A {prec(r)} {prec(r)} 0 {large_arc} {sweep_flag} {prec(x2)} {prec(y2)}'
        self.tags.append(self.tag('path', d=d, **attrs))

    def line(self, x1, y1, x2, y2):
        self._extend(max(x1, x2), max(y1, y2))
        self.tags.append(self.tag('line', x1=prec(x1), y1=prec(y1), x2=prec(x2), y2=prec(y2),
                                  stroke=self.settings.stroke))

    def text(self, x, y, text):
        self._extend(x + len(text)*self.settings.char_width*2, y)
        self.tags.append(self.tag('text', [Text(text)], x=prec(x), y=prec(y),
                                  font_family=self.settings.font_family, font_size=prec(self.settings.font_size)))

    @property
    def size(self):
        return self._size

    @property
    def extent(self):
        """ ``(max_x, max_y)`` of everything drawn so far. """
        return self._extent

    def to_svg(self, margin=None):
        """ Serialize into an SVG document. Unbounded surfaces are sized to their content plus ``margin``, which
        defaults to the node spacing. """
        if (size := self._size) is None:
            margin = self.settings.margin if margin is None else margin
            size = math.ceil(self._extent[0] + margin), math.ceil(self._extent[1] + margin)
        return setup_svg(self.tags, size, pagecolor=self.settings.background, tag=self.tag)


@dataclass(frozen=True, slots=True)
class _Placement:
    ''' Where a subtree was drawn and how far the layout advanced '''
    x: float
    y: float
    next_x: float


def render(tree, surface, label=None, settings=None):
    """ Draw ``tree`` onto ``surface``.

    Nodes are laid out in-order from left to right, advancing by :py:attr:`.RenderSettings.margin` per node, with one
    row per tree level. ``label``, usually the normalized equation, is written above the root node.

    :param tree: :py:class:`~.tree.ExpressionNode` to draw
    :param surface: :py:class:`.Surface` to draw onto
    :param str label: Optional text to write above the tree
    :param settings: :py:class:`.RenderSettings` to use. Defaults apply when ``None``.
    :returns: ``(x, y)`` coordinates of the root node
    :rtype: tuple
    """

    settings = settings or RenderSettings()
    root = _draw_branch(tree, surface, settings, 1, settings.margin)
    needed_width = root.next_x

    if label:
        # Long labels are shifted right instead of being cut off at the left edge
        label_x = max(0, root.x - settings.char_width*len(label))
        surface.text(label_x, root.y - settings.label_offset, label)
        needed_width = max(needed_width, label_x + 2*settings.char_width*len(label))

    if (size := surface.size) is not None:
        width, height = size
        needed = needed_width, (tree.depth + 1) * settings.margin
        if needed[0] > width or needed[1] > height:
            warnings.warn(f'Tree diagram of size {needed[0]:.0f}x{needed[1]:.0f} does not fit onto surface of size '
                          f'{width:.0f}x{height:.0f}', CanvasOverflowWarning)

    return root.x, root.y


def _draw_node(surface, settings, text, x, y):
    surface.arc(x, y, settings.node_radius)
    surface.text(x - settings.char_width*len(text), y + settings.baseline_offset, text)
    return x + settings.margin


def _draw_branch(node, surface, settings, depth, x):
    m, lo = settings.margin, settings.line_offset
    root_y = depth * m
    branch_y = root_y + m

    if not isinstance(node, Operator):
        return _Placement(x, root_y, _draw_node(surface, settings, node.text, x, root_y))

    if isinstance(node.left, Operator):
        lower = _draw_branch(node.left, surface, settings, depth+1, x)
        x = lower.next_x
        root_x = x
        surface.line(root_x - lo, root_y + lo, lower.x + lo, lower.y - lo)
    else:
        surface.line(x + lo, branch_y - lo, x + m - lo, root_y + lo)
        x = _draw_node(surface, settings, node.left.text, x, branch_y)
        root_x = x

    x = _draw_node(surface, settings, node.op, root_x, root_y)

    if isinstance(node.right, Operator):
        lower = _draw_branch(node.right, surface, settings, depth+1, x)
        surface.line(root_x + lo, root_y + lo, lower.x - lo, lower.y - lo)
        x = lower.next_x
    else:
        surface.line(x - lo, branch_y - lo, x - m + lo, root_y + lo)
        x = _draw_node(surface, settings, node.right.text, x, branch_y)

    return _Placement(root_x, root_y, x)


def render_svg(equation, parser_settings=None, settings=None):
    """ Normalize ``equation``, build its tree and render it into a standalone SVG document sized to fit.

    :raises MalformedEquationError: if the equation cannot be normalized or analyzed.
    :rtype: :py:class:`~.utils.Tag`
    """
    settings = settings or RenderSettings()
    eq = normalize(equation, parser_settings)
    tree = build_tree(eq, parser_settings)
    surface = SvgSurface(settings=settings)
    render(tree, surface, label=eq, settings=settings)
    return surface.to_svg()
