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
eqreps
======

eqreps converts infix arithmetic equations into other representations: a binary expression tree that can be drawn as
a diagram, and postfix (Reverse Polish) notation.
"""

__version__ = '1.0.0'

from .utils import MalformedEquationError, Reason
from .settings import ParserSettings, RenderSettings
from .normalize import normalize, try_normalize
from .tree import build_tree, Leaf, Operator
from .postfix import to_postfix, postfix_tokens
from .render import render, render_svg, SvgSurface
