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

import re
import sys

import pytest

from ..normalize import normalize
from ..postfix import postfix_tokens
from ..settings import ParserSettings
from ..tree import build_tree, root_position, precedence_score, Leaf, Operator
from ..utils import Reason, MalformedEquationError


def op(o, l, r):
    l = Leaf(l) if isinstance(l, str) else l
    r = Leaf(r) if isinstance(r, str) else r
    return Operator(o, l, r)


DOC_EXAMPLE = '(12*A^2-2*A+31)/(4*A+6)'


@pytest.mark.parametrize('equation,expected', [
    ('4+5', op('+', '4', '5')),
    ('2*5+8', op('+', op('*', '2', '5'), '8')),
    ('2+5*8', op('+', '2', op('*', '5', '8'))),
    ('4*5/8', op('/', op('*', '4', '5'), '8')),
    ('1-2-3', op('-', op('-', '1', '2'), '3')),
    ('2^3^2', op('^', op('^', '2', '3'), '2')),
    ('(4+5)*6', op('*', op('+', '4', '5'), '6')),
    ('2*(3+4)+1', op('+', op('*', '2', op('+', '3', '4')), '1')),
    ('4+(5^6*(4+3))', op('+', '4', op('*', op('^', '5', '6'), op('+', '4', '3')))),
    ('(2+3*4)', op('+', '2', op('*', '3', '4'))),
    ('12.5*abc', op('*', '12.5', 'abc')),
    (DOC_EXAMPLE, op('/',
        op('+', op('-', op('*', '12', op('^', 'A', '2')), op('*', '2', 'A')), '31'),
        op('+', op('*', '4', 'A'), '6'))),
])
def test_build_tree(equation, expected):
    assert build_tree(equation) == expected


def test_root_selection():
    # "+" outside parentheses scores lowest
    assert root_position('4+(5^6*(4+3))') == 1
    # Inside the parentheses, "*" (2+4-0.04) beats "^" (3+4-0.02)
    assert root_position('(5^6*(4+3))') == 4
    # Of two equal operators, the later one is the root
    assert root_position('4*5/8') == 3
    assert root_position('42') is None
    assert root_position('(x)') is None


def test_precedence_score():
    assert precedence_score('^', 1, 2) == pytest.approx(6.98)
    assert precedence_score('*', 1, 6) == pytest.approx(5.94)
    assert precedence_score('+', 0, 0) == pytest.approx(1)
    assert precedence_score('-', 2, 10, paren_score=5) == pytest.approx(10.9)


@pytest.mark.parametrize('equation,text', [
    ('42', '42'),
    ('(x)', 'x'),
    ('((3.5))', '3.5'),
])
def test_leaf(equation, text):
    assert build_tree(equation) == Leaf(text)


def test_infix():
    assert build_tree(DOC_EXAMPLE).infix() == '((((12*(A^2))-(2*A))+31)/((4*A)+6))'
    assert str(build_tree('2*5+8')) == '((2*5)+8)'
    assert build_tree('7').infix() == '7'


def test_dump():
    assert list(build_tree('2*5+8').dump()) == ['+', '  *', '    2', '    5', '  8']
    assert list(build_tree('x').dump(indent='--')) == ['x']


def test_depth_and_leaves():
    tree = build_tree('4+(5^6*(4+3))')
    assert tree.depth == 4
    assert [leaf.text for leaf in tree.leaves()] == ['4', '5', '6', '4', '3']
    assert Leaf('1').depth == 1


def test_nodes_are_immutable():
    tree = build_tree('1+2')
    with pytest.raises(AttributeError):
        tree.op = '-'


TOKEN_RE = re.compile(r'[A-Za-z0-9.]+|[-+*/^]')

@pytest.mark.parametrize('raw', [
    '4+5*6',
    '(4+5)*6',
    '4*5/8',
    '1-2+3',
    '2^3^2',
    '2*3^2',
    '2^3*2',
    '8(2+1)',
    '4+(5^6*(4+3))',
    DOC_EXAMPLE,
    '(a+b)(c-d)/e',
])
def test_postorder_matches_postfix(raw):
    eq = normalize(raw)
    tree = build_tree(eq)
    tokens = list(tree.postorder())
    assert sorted(tokens) == sorted(TOKEN_RE.findall(eq))
    assert tokens == postfix_tokens(eq)


@pytest.mark.parametrize('equation,reason', [
    ('-5', Reason.MISSING_OPERAND),
    ('5+', Reason.MISSING_OPERAND),
    ('2*+3', Reason.MISSING_OPERAND),
    ('(+3)', Reason.MISSING_OPERAND),
    ('2*()', Reason.MISSING_OPERAND),
    ('2%3', Reason.INVALID_CHARACTER),
    ('2_3', Reason.INVALID_CHARACTER),
    ('(2)(3)', Reason.INVALID_OPERAND),
    ('', Reason.EMPTY_INPUT),
])
def test_malformed(equation, reason):
    with pytest.raises(MalformedEquationError) as exc_info:
        build_tree(equation)
    assert exc_info.value.reason == reason


def test_max_depth():
    settings = ParserSettings(max_depth=2)
    with pytest.raises(MalformedEquationError) as exc_info:
        build_tree('1+2+3+4', settings)
    assert exc_info.value.reason == Reason.NESTING_TOO_DEEP

    assert build_tree('1+2+3', settings) == op('+', op('+', '1', '2'), '3')


def test_deep_nesting_within_limit():
    eq = '(' * 40 + '1+2' + ')' * 40
    assert build_tree(eq) == op('+', '1', '2')


def test_too_long():
    # Past 100 characters the position term would outweigh a precedence tier
    eq = '1+' + '(2)*3*' * 16 + '4'
    assert len(eq) == 99
    assert build_tree(eq).op == '+'

    with pytest.raises(MalformedEquationError) as exc_info:
        build_tree(eq + '*5')
    assert exc_info.value.reason == Reason.TOO_LONG


def test_recursion_limit():
    n = sys.getrecursionlimit()
    eq = '1+' * n + '1'
    settings = ParserSettings(max_length=len(eq), max_depth=2*n)
    with pytest.raises(MalformedEquationError) as exc_info:
        build_tree(eq, settings)
    assert exc_info.value.reason == Reason.NESTING_TOO_DEEP
