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

import pytest

from ..postfix import to_postfix, postfix_tokens
from ..utils import Reason, MalformedEquationError


@pytest.mark.parametrize('equation,expected', [
    ('4+5*6', '4  5  6  *  +'),
    ('(4+5)*6', '4  5  +  6  *'),
    ('12+ab.3', '12  ab.3  +'),
    ('2^3^2', '2  3  ^  2  ^'),
    ('1+2^3', '1  2  3  ^  +'),
    ('2*3-4', '2  3  *  4  -'),
    ('8*(2+1)', '8  2  1  +  *'),
    ('42', '42'),
    ('((x))', 'x'),
])
def test_to_postfix(equation, expected):
    assert to_postfix(equation) == expected


def test_plus_flushes_everything():
    # A precedence-correct converter would keep "^" and "*" apart here too, but "-" empties the whole stack
    assert postfix_tokens('1*2^3-4') == ['1', '2', '3', '^', '*', '4', '-']
    assert postfix_tokens('1+2*3+4') == ['1', '2', '3', '*', '+', '4', '+']


def test_power_is_left_associative():
    assert postfix_tokens('2^3^4') == ['2', '3', '^', '4', '^']


def test_delimiter():
    assert to_postfix('1+2', ' ') == '1 2 +'
    assert to_postfix('(a-b)/c', delimiter=',') == 'a,b,-,c,/'


def test_no_trailing_delimiter():
    out = to_postfix('(1+2)*(3+4)')
    assert out == '1  2  +  3  4  +  *'
    assert out == out.strip()


def test_empty():
    assert postfix_tokens('') == []
    assert to_postfix('') == ''


def test_invalid_character():
    with pytest.raises(MalformedEquationError) as exc_info:
        to_postfix('2%3')
    assert exc_info.value.reason == Reason.INVALID_CHARACTER
    assert 'position 1' in str(exc_info.value)
