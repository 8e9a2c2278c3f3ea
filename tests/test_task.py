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
import numpy as np
import pytest

from cpm_diagram import InvalidDuration, Task
from cpm_diagram.task import MAX_DURATION

#==============================================================================
def test_task_fields():
    t = Task('A', 'Design', 3, ['X', 'Y'])
    assert t.to_dict() == {'id': 'A', 'description': 'Design', 'duration': 3,
                           'predecessors': ['X', 'Y']}
    assert t == Task('A', 'Design', 3, ('X', 'Y'))

def test_numpy_integer_duration_becomes_int():
    t = Task('A', '', np.int64(4))
    assert type(t.duration) is int
    assert t.duration == 4

@pytest.mark.parametrize('duration', [-1, 2.5, '3', None, False])
def test_invalid_duration_on_construction(duration):
    with pytest.raises(InvalidDuration) as e:
        Task('A', '', duration)
    assert e.value.node_id == 'A'
    assert 'A' in str(e.value)

def test_duration_limit():
    assert Task('A', '', MAX_DURATION).duration == MAX_DURATION
    for duration in (MAX_DURATION + 1, 2 ** 63, 2 ** 100):
        with pytest.raises(InvalidDuration):
            Task('A', '', duration)
