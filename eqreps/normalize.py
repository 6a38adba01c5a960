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
import warnings
from dataclasses import dataclass

from .settings import ParserSettings
from .utils import Reason, MalformedEquationError, AdjacentGroupWarning


def check_parens(equation):
    """ Raise :py:class:`.MalformedEquationError` if ``equation`` does not contain as many opening as closing
    parentheses. Only counts are compared, not nesting order. """

    open_count, close_count = equation.count('('), equation.count(')')

    if open_count == close_count:
        return

    if open_count == 0:
        raise MalformedEquationError(Reason.UNPAIRED_CLOSE_PAREN, 'ERROR: Unpaired close parenthesis',
                open_count, close_count)

    elif close_count == 0:
        raise MalformedEquationError(Reason.UNPAIRED_OPEN_PAREN, 'ERROR: Unpaired open parenthesis',
                open_count, close_count)

    else:
        raise MalformedEquationError(Reason.PAREN_COUNT_MISMATCH,
                f'ERROR: Parenthesis count mismatch. {open_count} open, {close_count} closed',
                open_count, close_count)


def check_length(equation, settings):
    """ Raise :py:class:`.MalformedEquationError` if ``equation`` is longer than
    :py:attr:`.ParserSettings.max_length`. """
    if len(equation) > settings.max_length:
        raise MalformedEquationError(Reason.TOO_LONG,
                f'ERROR: Equation too long. {len(equation)} characters, at most {settings.max_length} allowed')


def normalize(raw, settings=None):
    """ Validate and clean up a raw infix equation.

    Whitespace is removed, and implicit multiplications next to parentheses are made explicit: ``8(2+1)`` becomes
    ``8*(2+1)``, ``(2+1)8`` becomes ``(2+1)*8``. Of ``)(`` adjacencies only the first one is replaced unless
    :py:attr:`.ParserSettings.fix_all_adjacent_groups` is set.

    :param str raw: The equation as entered by the user
    :param settings: :py:class:`.ParserSettings` to use. Defaults apply when ``None``.
    :raises MalformedEquationError: if the equation is empty, has unbalanced parentheses, or is too long either as
                                    entered or after normalization.
    :rtype: str
    """

    settings = settings or ParserSettings()

    if not raw:
        raise MalformedEquationError(Reason.EMPTY_INPUT, 'ERROR: An equation is required')

    check_length(raw, settings)
    check_parens(raw)

    eq = re.sub(r'\s', '', raw)
    eq = re.sub(r'([A-Za-z0-9.])\(', r'\1*(', eq)
    eq = re.sub(r'\)([A-Za-z0-9.])', r')*\1', eq)

    eq = eq.replace(')(', ')*(', -1 if settings.fix_all_adjacent_groups else 1)

    # Inserted "*" count against the limit, too
    check_length(eq, settings)

    if ')(' in eq:
        warnings.warn(f'Only the first of several adjacent parenthesized groups in "{eq}" was joined with an '
                      'explicit multiplication.', AdjacentGroupWarning)

    return eq


@dataclass(frozen=True, slots=True)
class NormalizeResult:
    """ Outcome of :py:func:`.try_normalize`. Exactly one of ``equation`` and ``error`` is set. """
    equation: str = None
    error: MalformedEquationError = None

    @property
    def ok(self):
        return self.error is None


def try_normalize(raw, settings=None):
    """ Like :py:func:`.normalize`, but return a :py:class:`.NormalizeResult` instead of raising on malformed input. """
    try:
        return NormalizeResult(equation=normalize(raw, settings))
    except MalformedEquationError as e:
        return NormalizeResult(error=e)
