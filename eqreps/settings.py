#! /usr/bin/env python
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

from dataclasses import dataclass


@dataclass
class ParserSettings:
    ''' Settings for equation normalization and tree analysis.

    .. note::
        The tree builder breaks ties between operators of equal precedence and nesting depth by subtracting
        ``position / 100`` from their score. Past 100 characters that term outweighs a whole precedence tier, which is
        why ``max_length`` defaults to 100.
    '''
    #: Maximum length of an equation, both as entered including whitespace and after normalization.
    max_length : int = 100
    #: Maximum recursion depth of the tree analysis.
    max_depth : int = 200
    #: Score added to an operator per level of parenthesis nesting.
    paren_score : int = 4
    #: Make every ``)(`` adjacency an explicit multiplication, not only the first one.
    fix_all_adjacent_groups : bool = False

    # input validation
    def __setattr__(self, name, value):
        if name in ('max_length', 'max_depth') and (not isinstance(value, int) or value < 1):
            raise ValueError(f'{name} must be a positive integer, not {value!r}')
        elif name == 'paren_score' and (not isinstance(value, (int, float)) or value < 3):
            # Below the highest base precedence, a nested "+" would score lower than an outer "^"
            raise ValueError(f'paren_score must be a number of at least 3, not {value!r}')
        elif name == 'fix_all_adjacent_groups' and not isinstance(value, bool):
            raise ValueError(f'fix_all_adjacent_groups must be a bool, not {value!r}')

        super().__setattr__(name, value)


@dataclass
class RenderSettings:
    ''' Geometry and style of rendered expression tree diagrams. All lengths are in pixels. '''
    #: Distance between neighboring nodes, both horizontally and between rows.
    margin : float = 65
    #: Offset of edge line end points from the centers of the nodes they connect.
    line_offset : float = 14
    #: Node circle radius
    node_radius : float = 20
    #: Approximate width of one label character, used to center labels.
    char_width : float = 5
    #: Shift of text baselines below the point they are centered on
    baseline_offset : float = 5
    #: Distance of the equation label baseline above the root node center
    label_offset : float = 25
    #: Font size of node and equation labels
    font_size : float = 14
    font_family : str = 'monospace'
    stroke : str = 'black'
    background : str = 'white'

    def __setattr__(self, name, value):
        if name in ('margin', 'node_radius', 'char_width', 'font_size') and \
                (not isinstance(value, (int, float)) or value <= 0):
            raise ValueError(f'{name} must be a positive number, not {value!r}')
        elif name in ('line_offset', 'baseline_offset', 'label_offset') and \
                (not isinstance(value, (int, float)) or value < 0):
            raise ValueError(f'{name} must be a non-negative number, not {value!r}')

        super().__setattr__(name, value)
