#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    CPM Diagram
    Copyright (C) 2025 anonimous

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this program.  If not, see <http://www.gnu.org/licenses/>.

    Please contact with me by E-mail: shkolnick.kun@gmail.com
"""
import json

from cpm_diagram import DependencyGraph
from cpm_diagram.cli import main, make_parser

TASKS = [
    {'id': 'A', 'description': 'Design', 'duration': 3, 'predecessors': []},
    {'id': 'B', 'description': 'Build', 'duration': 2, 'predecessors': ['A']},
    {'id': 'C', 'description': 'Buy', 'duration': 5, 'predecessors': ['A']},
    {'id': 'D', 'description': 'Ship', 'duration': 4, 'predecessors': ['B', 'C']},
]

def write_json(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')
    return str(path)

#==============================================================================
def test_defaults():
    args = make_parser().parse_args(['tasks.json'])
    assert args.output == 'graph'
    assert args.format == 'png'
    assert not args.strict

def test_dot_output(tmp_path, capsys):
    out = tmp_path / 'diagram.dot'
    status = main([write_json(tmp_path / 'tasks.json', TASKS), '-f', 'dot', '-o', str(out)])

    assert status == 0
    text = out.read_text(encoding='utf-8')
    assert text.startswith('strict digraph network_diagram {')
    assert text.count('[color=red penwidth=2]') == 2
    assert '<td height="30">C</td>' in text
    assert f'{out} has been created.' in capsys.readouterr().out

def test_cycle_fails(tmp_path, caplog):
    tasks = [
        {'id': 'A', 'duration': 1, 'predecessors': ['B']},
        {'id': 'B', 'duration': 1, 'predecessors': ['A']},
    ]
    out = tmp_path / 'diagram.dot'
    status = main([write_json(tmp_path / 'tasks.json', tasks), '-f', 'dot', '-o', str(out)])

    assert status == 1
    assert not out.exists()
    assert 'Cyclic dependency' in caplog.text

def test_unknown_predecessor_fails(tmp_path, caplog):
    tasks = [{'id': 'A', 'duration': 1, 'predecessors': ['Z']}]
    status = main([write_json(tmp_path / 'tasks.json', tasks), '-f', 'dot',
                   '-o', str(tmp_path / 'out.dot')])

    assert status == 1
    assert "'Z'" in caplog.text

def test_missing_input_fails(tmp_path, caplog):
    status = main([str(tmp_path / 'nope.json'), '-f', 'dot', '-o', str(tmp_path / 'out.dot')])
    assert status == 1
    assert "Couldn't load tasks" in caplog.text

def test_disconnected_network_warns(tmp_path, caplog):
    tasks = [{'id': 'A', 'duration': 1}, {'id': 'B', 'duration': 2}]
    status = main([write_json(tmp_path / 'tasks.json', tasks), '-f', 'dot',
                   '-o', str(tmp_path / 'out.dot')])

    assert status == 0
    assert 'not connected' in caplog.text

def test_not_utf8_input_fails(tmp_path, caplog):
    path = tmp_path / 'tasks.json'
    path.write_bytes(b'[{"id": "\xff", "duration": 1}]')
    status = main([str(path), '-f', 'dot', '-o', str(tmp_path / 'out.dot')])

    assert status == 1
    assert 'UTF-8' in caplog.text

def test_list_predecessor_fails(tmp_path, caplog):
    tasks = [{'id': 'A', 'duration': 1, 'predecessors': [['B']]}]
    status = main([write_json(tmp_path / 'tasks.json', tasks), '-f', 'dot',
                   '-o', str(tmp_path / 'out.dot')])

    assert status == 1
    assert "Couldn't load tasks" in caplog.text

def test_huge_duration_fails(tmp_path, caplog):
    tasks = [{'id': 'A', 'duration': 2 ** 63}]
    status = main([write_json(tmp_path / 'tasks.json', tasks), '-f', 'dot',
                   '-o', str(tmp_path / 'out.dot')])

    assert status == 1
    assert "'A'" in caplog.text

def test_connectivity_is_checked_once(tmp_path, monkeypatch):
    calls = []
    original = DependencyGraph.is_weakly_connected

    def counting(self):
        calls.append(1)
        return original(self)

    monkeypatch.setattr(DependencyGraph, 'is_weakly_connected', counting)
    status = main([write_json(tmp_path / 'tasks.json', TASKS), '-f', 'dot',
                   '-o', str(tmp_path / 'out.dot')])

    assert status == 0
    assert len(calls) == 1
