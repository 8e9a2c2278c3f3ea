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
import numbers

import numpy as np

from .errors import InvalidDuration

# Times are summed in int64 arrays, this keeps any path length in range
MAX_DURATION = int(np.iinfo(np.int32).max)

#==============================================================================
def check_duration(node_id, duration):
    """
    Return ``duration`` as a plain int or raise :class:`InvalidDuration`.

    Booleans are rejected even though they are integers in Python. Values
    above :data:`MAX_DURATION` are rejected as well.
    """
    if isinstance(duration, bool) or not isinstance(duration, numbers.Integral):
        raise InvalidDuration(node_id)
    if duration < 0 or duration > MAX_DURATION:
        raise InvalidDuration(node_id)
    return int(duration)

#==============================================================================
class Task:
    """
    Task payload stored in a dependency graph vertex.

    Parameters
    ----------
    id : hashable
        Unique task identifier
    description : str
        Human readable task description
    duration : int
        Task duration in time units, must be >= 0
    predecessors : iterable, optional
        Identifiers of tasks that must finish before this one starts

    Raises
    ------
    InvalidDuration
        If duration is negative or not an integer
    """
    def __init__(self, id, description='', duration=0, predecessors=()):
        assert isinstance(description, str)

        self.id           = id
        self.description  = description
        self.duration     = check_duration(id, duration)
        self.predecessors = list(predecessors)

    def __repr__(self):
        return str(self.to_dict())

    def __eq__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def to_dict(self):
        return {
            'id'          : self.id,
            'description' : self.description,
            'duration'    : self.duration,
            'predecessors': self.predecessors.copy(),
        }
