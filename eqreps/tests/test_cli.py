#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2023 Jan Sebastian Götte <code@jaseg.de>
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

import sys

import pytest
from click.testing import CliRunner
from bs4 import BeautifulSoup

from .. import cli


class TestCli:
    def invoke(self, *args, exit_code=0):
        runner = CliRunner()
        res = runner.invoke(cli.cli, list(map(str, args)))
        if exit_code == 0 and res.exception:
            raise res.exception
        assert res.exit_code == exit_code
        return res.output

    def test_version(self):
        assert self.invoke('--version').startswith('Version ')

    def test_normalize(self):
        assert self.invoke('normalize', '8(2+1)') == '8*(2+1)\n'
        assert self.invoke('normalize', ' (2 + 1) 8 ') == '(2+1)*8\n'

    def test_normalize_malformed(self):
        out = self.invoke('normalize', '(1+2', exit_code=1)
        assert 'Unpaired open parenthesis' in out

    def test_max_length(self):
        out = self.invoke('normalize', '--max-length', '3', '1+2+3', exit_code=1)
        assert 'too long' in out
        assert self.invoke('normalize', '--max-length', '5', '1+2+3') == '1+2+3\n'

    def test_adjacent_groups(self):
        assert self.invoke('normalize', '--fix-all-adjacent-groups', '(1)(2)(3)') == '(1)*(2)*(3)\n'
        assert self.invoke('normalize', '--warnings=ignore', '(1)(2)(3)') == '(1)*(2)(3)\n'
        out = self.invoke('normalize', '--warnings=error', '(1)(2)(3)', exit_code=1)
        assert 'adjacent' in out

    def test_postfix(self):
        assert self.invoke('postfix', '4+5*6') == '4  5  6  *  +\n'
        assert self.invoke('postfix', '(4 + 5)6') == '4  5  +  6  *\n'

    def test_postfix_delimiter(self):
        assert self.invoke('postfix', '-d', ',', '1+2') == '1,2,+\n'
        assert self.invoke('postfix', '--delimiter', '\\t', '1+2') == '1\t2\t+\n'
        self.invoke('postfix', '--delimiter', '', '1+2', exit_code=2)

    def test_postfix_malformed(self):
        out = self.invoke('postfix', '2%3', exit_code=1)
        assert 'Invalid character' in out

    def test_tree(self):
        assert self.invoke('tree', '2*5+8') == '+\n  *\n    2\n    5\n  8\n'
        assert self.invoke('tree', '--infix', '2*5+8') == '((2*5)+8)\n'

    def test_tree_malformed(self):
        out = self.invoke('tree', '5+', exit_code=1)
        assert 'Missing right operand' in out

    def test_tree_max_depth(self):
        out = self.invoke('tree', '--max-depth', '1', '1+2+3', exit_code=1)
        assert 'nested too deeply' in out

    def test_tree_recursion_limit(self):
        eq = '1+' * sys.getrecursionlimit() + '1'
        out = self.invoke('tree', '--max-length', len(eq), '--max-depth', len(eq), eq, exit_code=1)
        assert 'nested too deeply' in out

    def test_normalize_too_long_after_insertion(self):
        out = self.invoke('normalize', '--max-length', '6', '(1)(2)', exit_code=1)
        assert '7 characters' in out

    def test_render(self, tmp_path):
        outfile = tmp_path / 'out.svg'
        self.invoke('render', '4+(5^6*(4+3))', outfile)
        soup = BeautifulSoup(outfile.read_text(), features='xml')
        assert len(soup.find_all('circle')) == 9
        assert soup.find_all('text')[-1].text.strip() == '4+(5^6*(4+3))'

    def test_render_stdout(self):
        out = self.invoke('render', '--margin', '30', '1+2')
        assert out.strip().startswith('<?xml')
        assert '<circle' in out

    def test_render_size(self):
        out = self.invoke('render', '--size', '640', '480', '1+2')
        svg = BeautifulSoup(out, features='xml').find('svg')
        assert svg['width'] == '640'

        out = self.invoke('render', '--warnings=error', '--size', '50', '50', '1+2', exit_code=1)
        assert 'does not fit' in out
