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
Expression trees
================

The tree builder does not use a grammar. Instead, it scores every operator of an equation and picks the one scoring
lowest as the root, i.e. the operation that is evaluated last::

    [+, -] = 1
    [*, /] = 2
    [^]    = 3
    + paren_score for every level of enclosing parentheses
    - position / 100, so that of two otherwise equal operators the later one becomes the root

    4 + (5 ^ 6 * (4 + 3))
    4 +[1] (5 ^[7] 6 *[6] (4 +[9] 3))

The text left and right of the root is then analyzed the same way until only plain operands remain.
"""

from dataclasses import dataclass

from .normalize import check_length
from .settings import ParserSettings
from .utils import PRECEDENCE, OPERATORS, OPERAND_RUN_RE, Reason, MalformedEquationError, is_operand_char, \
        find_invalid_char


@dataclass(frozen=True, slots=True)
class ExpressionNode:
    def postorder(self):
        """ Yield this subtree's tokens in postfix order, i.e. left operand, right operand, operator. """
        raise NotImplementedError()

    def leaves(self):
        raise NotImplementedError()

    def infix(self):
        """ Return this subtree as a fully parenthesized infix string. """
        raise NotImplementedError()

    def dump(self, indent='  '):
        """ Yield one line of text per node, children indented below their parent. """
        raise NotImplementedError()

    @property
    def depth(self):
        raise NotImplementedError()


@dataclass(frozen=True, slots=True)
class Leaf(ExpressionNode):
    ''' A number literal or identifier '''
    text: str

    def postorder(self):
        yield self.text

    def leaves(self):
        yield self

    def infix(self):
        return self.text

    def dump(self, indent='  '):
        yield self.text

    @property
    def depth(self):
        return 1

    def __str__(self):
        return self.text


@dataclass(frozen=True, slots=True)
class Operator(ExpressionNode):
    op: str
    left: ExpressionNode
    right: ExpressionNode

    def postorder(self):
        yield from self.left.postorder()
        yield from self.right.postorder()
        yield self.op

    def leaves(self):
        yield from self.left.leaves()
        yield from self.right.leaves()

    def infix(self):
        return f'({self.left.infix()}{self.op}{self.right.infix()})'

    def dump(self, indent='  '):
        yield self.op
        for child in (self.left, self.right):
            for line in child.dump(indent):
                yield indent + line

    @property
    def depth(self):
        return 1 + max(self.left.depth, self.right.depth)

    def __str__(self):
        return self.infix()


def precedence_score(op, paren_depth, index, paren_score=4):
    """ Score of the operator ``op`` at position ``index`` inside ``paren_depth`` levels of parentheses. The operator
    scoring lowest is the root of an expression. """
    return PRECEDENCE[op] + paren_depth * paren_score - index / 100


def root_position(equation, paren_score=4):
    """ Return the index of the root operator of ``equation``, or ``None`` if it contains no operator. """
    paren_depth = 0
    root_pos, root_score = None, None

    for i, c in enumerate(equation):
        if c == '(':
            paren_depth += 1
        elif c == ')':
            paren_depth -= 1
        elif c in OPERATORS:
            score = precedence_score(c, paren_depth, i, paren_score)
            if root_score is None or score < root_score:
                root_pos, root_score = i, score

    return root_pos


def build_tree(equation, settings=None):
    """ Build the expression tree of a normalized equation.

    :param str equation: Equation as returned by :py:func:`~.normalize.normalize`
    :param settings: :py:class:`.ParserSettings` to use. Defaults apply when ``None``.
    :raises MalformedEquationError: if the equation contains invalid characters, is longer than
                                    :py:attr:`.ParserSettings.max_length`, an operator lacks an operand, or the
                                    analysis nests deeper than :py:attr:`.ParserSettings.max_depth` or Python allows.
    :rtype: :py:class:`.ExpressionNode`
    """

    settings = settings or ParserSettings()

    if not equation:
        raise MalformedEquationError(Reason.EMPTY_INPUT, 'ERROR: An equation is required')

    if (invalid := find_invalid_char(equation)):
        index, c = invalid
        raise MalformedEquationError(Reason.INVALID_CHARACTER, f'ERROR: Invalid character "{c}" at position {index}')

    check_length(equation, settings)

    try:
        return _analyze(equation, settings, 1)
    except RecursionError as e:
        raise MalformedEquationError(Reason.NESTING_TOO_DEEP,
                'ERROR: Equation nested too deeply. Analysis exceeded the interpreter recursion limit') from e


def _analyze(eq, settings, level):
    if level > settings.max_depth:
        raise MalformedEquationError(Reason.NESTING_TOO_DEEP,
                f'ERROR: Equation nested too deeply. Analysis exceeded {settings.max_depth} levels')

    pos = root_position(eq, settings.paren_score)
    if pos is None:
        return _leaf(eq)

    return Operator(eq[pos],
                    _left_operand(eq, pos, settings, level),
                    _right_operand(eq, pos, settings, level))


def _leaf(eq):
    text = eq.strip('()')

    if not text:
        raise MalformedEquationError(Reason.MISSING_OPERAND, f'ERROR: Empty parentheses in "{eq}"')

    if not OPERAND_RUN_RE.fullmatch(text):
        raise MalformedEquationError(Reason.INVALID_OPERAND, f'ERROR: "{eq}" is not a number or identifier')

    return Leaf(text)


def _group_start(eq, close_pos):
    """ Scan left from the closing parenthesis at ``close_pos`` and return the index just right of the parenthesis
    enclosing it, or 0 if there is none. """
    level = 0
    for i in range(close_pos, -1, -1):
        if eq[i] == ')':
            level += 1
        elif eq[i] == '(':
            level -= 1
            if level < 0:
                return i + 1
    return 0


def _group_end(eq, open_pos):
    """ Mirror image of :py:func:`._group_start` """
    level = 0
    for i in range(open_pos, len(eq)):
        if eq[i] == '(':
            level += 1
        elif eq[i] == ')':
            level -= 1
            if level < 0:
                return i
    return len(eq)


def _left_operand(eq, pos, settings, level):
    i = pos - 1

    if i < 0 or eq[i] in OPERATORS or eq[i] == '(':
        raise MalformedEquationError(Reason.MISSING_OPERAND, f'ERROR: Missing left operand of "{eq[pos]}" in "{eq}"')

    if eq[i] == ')':
        return _analyze(eq[_group_start(eq, i):pos], settings, level+1)

    start = i
    while start > 0 and is_operand_char(eq[start-1]):
        start -= 1

    # In 2*5+8, the left operand of + is 2*5, not 5.
    if start > 0 and eq[start-1] in OPERATORS:
        return _analyze(eq[:pos], settings, level+1)

    return Leaf(eq[start:pos])


def _right_operand(eq, pos, settings, level):
    i = pos + 1

    if i >= len(eq) or eq[i] in OPERATORS or eq[i] == ')':
        raise MalformedEquationError(Reason.MISSING_OPERAND, f'ERROR: Missing right operand of "{eq[pos]}" in "{eq}"')

    if eq[i] == '(':
        return _analyze(eq[i:_group_end(eq, i)], settings, level+1)

    end = i + 1
    while end < len(eq) and is_operand_char(eq[end]):
        end += 1

    if end < len(eq) and eq[end] in OPERATORS:
        return _analyze(eq[i:], settings, level+1)

    return Leaf(eq[i:end])
