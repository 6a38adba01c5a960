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

"""
eqreps.utils
============
**Character classification and SVG helpers**

This module provides the small helpers shared by the normalizer, the tree builder, the postfix converter and the
renderer.
"""

import re
import textwrap
from enum import Enum


class Reason(Enum):
    """ Why an equation was rejected. """
    EMPTY_INPUT = 'equation required'
    UNPAIRED_OPEN_PAREN = 'unpaired open parenthesis'
    UNPAIRED_CLOSE_PAREN = 'unpaired close parenthesis'
    PAREN_COUNT_MISMATCH = 'parenthesis count mismatch'
    TOO_LONG = 'equation too long'
    INVALID_CHARACTER = 'invalid character'
    MISSING_OPERAND = 'missing operand'
    INVALID_OPERAND = 'invalid operand'
    NESTING_TOO_DEEP = 'nesting too deep'


class MalformedEquationError(ValueError):
    """ An equation could not be normalized or analyzed. The message is meant to be shown to the user as-is. """

    def __init__(self, reason, message=None, open_count=None, close_count=None):
        super().__init__(message or f'ERROR: {reason.value.capitalize()}')
        self.reason = reason
        self.open_count = open_count
        self.close_count = close_count


class AdjacentGroupWarning(UserWarning):
    """ Normalization left a ``)(`` adjacency without an explicit multiplication. """
    pass


class CanvasOverflowWarning(UserWarning):
    """ A rendered diagram does not fit onto its drawing surface. """
    pass


class CharClass(Enum):
    """ Lexical class of a single equation character. """
    #: Digit, letter or decimal point. Runs of these form one operand.
    OPERAND = 0
    #: One of ``+ - * / ^``
    OPERATOR = 1
    OPEN_PAREN = 2
    CLOSE_PAREN = 3


#: Base precedence of each operator. Lower values bind weaker.
PRECEDENCE = {
    '+': 1,
    '-': 1,
    '*': 2,
    '/': 2,
    '^': 3,
}

OPERATORS = frozenset(PRECEDENCE)

OPERAND_RE = re.compile(r'[A-Za-z0-9.]')
OPERAND_RUN_RE = re.compile(r'[A-Za-z0-9.]+')


def is_operand_char(c):
    """ Return ``True`` if ``c`` is a single character that can be part of an operand. """
    return bool(c) and len(c) == 1 and bool(OPERAND_RE.fullmatch(c))


def is_operator(c):
    return c in OPERATORS


def char_class(c):
    """ Classify a single character.

    :param str c: The character to classify
    :returns: The character's class, or ``None`` for characters outside the equation alphabet.
    :rtype: :py:class:`.CharClass` or ``None``
    """

    if c == '(':
        return CharClass.OPEN_PAREN
    elif c == ')':
        return CharClass.CLOSE_PAREN
    elif c in OPERATORS:
        return CharClass.OPERATOR
    elif is_operand_char(c):
        return CharClass.OPERAND
    return None


def find_invalid_char(equation):
    """ Return ``(index, char)`` of the first character of ``equation`` outside the equation alphabet, or ``None`` if
    there is none. """
    for i, c in enumerate(equation):
        if char_class(c) is None:
            return i, c
    return None


class Tag:
    """ Helper class to ease creation of SVG. All API functions that create SVG allow you to substitute this with your
    own implementation by passing a ``tag`` parameter. """

    def __init__(self, name, children=None, root=False, **attrs):
        self.name, self.attrs = name, attrs
        self.children = children or []
        self.root = root

    def __str__(self):
        prefix = '<?xml version="1.0" encoding="utf-8"?>\n' if self.root else ''
        opening = ' '.join([self.name] + [f'{key.replace("__", ":").replace("_", "-")}="{value}"' for key, value in self.attrs.items()])
        if self.children:
            children = '\n'.join(textwrap.indent(str(c), '  ') for c in self.children)
            return f'{prefix}<{opening}>\n{children}\n</{self.name}>'
        else:
            return f'{prefix}<{opening}/>'


class Text:
    """ Escaped SVG character data, for use as a :py:class:`.Tag` child. """

    def __init__(self, text):
        self.text = text

    def __str__(self):
        return self.text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def setup_svg(tags, size, pagecolor='white', tag=Tag):
    """ Wrap ``tags`` into an ``svg`` root element of the given ``(width, height)`` in pixels. """
    w, h = size
    return tag('svg', [tag('rect', x=0, y=0, width=w, height=h, fill=pagecolor), *tags],
            width=f'{w}', height=f'{h}',
            viewBox=f'0 0 {w} {h}',
            xmlns="http://www.w3.org/2000/svg",
            root=True)
