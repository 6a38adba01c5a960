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

from .utils import Reason, MalformedEquationError, is_operand_char, find_invalid_char

#: Stack operators flushed by each incoming operator. Note that "+" and "-" flush everything, and "^" is treated as
#: left-associative.
FLUSHED_BY = {
    '+': frozenset('+-*/^'),
    '-': frozenset('+-*/^'),
    '*': frozenset('*/^'),
    '/': frozenset('*/^'),
    '^': frozenset('^'),
}

DEFAULT_DELIMITER = '  '


def postfix_tokens(equation):
    """ Convert a normalized infix equation into a list of tokens in postfix (Reverse Polish) order.

    :param str equation: Equation as returned by :py:func:`~.normalize.normalize`
    :raises MalformedEquationError: if the equation contains characters outside the equation alphabet.
    :rtype: list
    """

    if (invalid := find_invalid_char(equation)):
        index, c = invalid
        raise MalformedEquationError(Reason.INVALID_CHARACTER, f'ERROR: Invalid character "{c}" at position {index}')

    stack, out = [], []
    i = 0
    while i < len(equation):
        c = equation[i]

        if c == ')':
            while stack and stack[-1] != '(':
                out.append(stack.pop())
            if stack:
                stack.pop()

        elif c in FLUSHED_BY:
            while stack and stack[-1] in FLUSHED_BY[c]:
                out.append(stack.pop())
            stack.append(c)

        elif c == '(':
            stack.append(c)

        else:
            start = i
            while i+1 < len(equation) and is_operand_char(equation[i+1]):
                i += 1
            out.append(equation[start:i+1])

        i += 1

    # Leftover open parentheses only occur in unbalanced input
    out.extend(token for token in reversed(stack) if token != '(')
    return out


def to_postfix(equation, delimiter=DEFAULT_DELIMITER):
    """ Convert a normalized infix equation into a postfix string with ``delimiter`` between tokens.

    >>> to_postfix('4+5*6')
    '4  5  6  *  +'
    """
    return delimiter.join(postfix_tokens(equation))
