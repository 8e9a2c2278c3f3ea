#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CPM Diagram - Critical Path Method on activity-on-node networks
===============================================================

This module computes CPM time parameters for tasks connected by
finish-to-start dependencies stored in a :class:`DependencyGraph`.

Features
--------
- Fail-fast validation: dangling links, directed cycles, invalid durations
- Single topological pass for early times and one reverse pass for late times
- Project completion time taken over all tasks, so networks with several
  final tasks are handled correctly
- Critical tasks, critical links and an optional strict critical link check
- Export to dictionaries and pandas DataFrames

Classes
-------
- :class:`CpmEngine`: Validates a graph and computes the schedule
- :class:`CpmSchedule`: Computed time table and critical path
- :class:`TaskTimes`: Time parameters of one task
- :class:`CpmOutcome`: Either a schedule or an error

Usage Example
-------------
>>> from cpm_diagram import DependencyGraph, Task, CpmEngine
>>> g = DependencyGraph()
>>> g.add_vertex('A', Task('A', 'Design', 3))
>>> g.add_vertex('B', Task('B', 'Build', 2))
>>> g.connect('A', 'B')
>>> schedule = CpmEngine().compute(g)
>>> schedule.project_finish
5

Critical links
--------------
A link is reported as critical when both of its tasks have zero slack.
When several zero slack chains exist such a link does not necessarily lie on
a longest path. :meth:`CpmSchedule.strict_critical_edges` returns only the
links that lie on some path of length ``project_finish``.
"""

#==============================================================================
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

#==============================================================================
import numpy as np
import pandas as pd

from .errors import CpmError, CyclicDependency, InvalidDuration, UnknownNodeReference
from .task import check_duration

_EMPTY = frozenset()

# Depth-first walk vertex states
_NEW    = 0
_ACTIVE = 1  # On the current walk path
_DONE   = 2

#==============================================================================
class TaskTimes:
    """
    CPM time parameters of a single task.

    Parameters
    ----------
    id : hashable
        Task identifier
    description : str
        Task description copied from the payload (empty if absent)
    duration : int
        Task duration
    early_start, early_finish, late_start, late_finish : int
        CPM times
    slack : int
        Total float, ``late_start - early_start``
    """
    def __init__(self, id, description, duration, early_start, early_finish,
                 late_start, late_finish, slack):
        self.id           = id
        self.description  = description
        self.duration     = duration
        self.early_start  = early_start
        self.early_finish = early_finish
        self.late_start   = late_start
        self.late_finish  = late_finish
        self.slack        = slack

    @property
    def is_critical(self):
        return 0 == self.slack

    def __repr__(self):
        return str(self.to_dict())

    def __eq__(self, other):
        if not isinstance(other, TaskTimes):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def to_dict(self):
        return {
            'id'          : self.id,
            'description' : self.description,
            'duration'    : self.duration,
            'early_start' : self.early_start,
            'early_finish': self.early_finish,
            'late_start'  : self.late_start,
            'late_finish' : self.late_finish,
            'slack'       : self.slack,
            'critical'    : self.is_critical,
        }

#==============================================================================
class CpmSchedule:
    """
    Result of a CPM computation.

    Instances are created by :meth:`CpmEngine.compute` and hold a snapshot of
    the graph links, so they stay valid if the graph is modified later. Such
    modifications are not reflected, compute a new schedule instead.

    Attributes
    ----------
    times : dict
        Task id -> :class:`TaskTimes`
    order : list
        Task ids in topological order (predecessors first)
    project_finish : int
        Project completion time, the maximum early finish over all tasks
    edges : list
        ``(src, dst)`` links of the graph
    weakly_connected : bool
        Whether the graph was weakly connected (diagnostic only)
    """
    def __init__(self, times, order, project_finish, edges, weakly_connected):
        self.times            = times
        self.order            = order
        self.project_finish   = project_finish
        self.edges            = edges
        self.weakly_connected = weakly_connected

    def __getitem__(self, id):
        return self.times[id]

    def __len__(self):
        return len(self.times)

    @property
    def critical_nodes(self):
        """Set of tasks with zero slack."""
        return {id for id, t in self.times.items() if t.is_critical}

    @property
    def critical_edges(self):
        """
        Set of links whose both tasks have zero slack.

        This is an approximation, see :meth:`strict_critical_edges`.
        """
        return {(a, b) for a, b in self.edges
                if self.times[a].is_critical and self.times[b].is_critical}

    def strict_critical_edges(self):
        """
        Set of links lying on some path of length ``project_finish``.

        The longest path through ``a -> b`` is
        ``early_finish(a) + project_finish - late_start(b)``, so the link is
        on a critical path iff ``early_finish(a) == late_start(b)``.
        """
        return {(a, b) for a, b in self.edges
                if self.times[a].early_finish == self.times[b].late_start}

    def __repr__(self):
        _repr = f'Project finish: {self.project_finish}\n'
        _repr += 'Tasks:{\n'
        for id in self.order:
            _repr += '        ' + str(self.times[id]) + '\n'
        _repr += '}\n'
        return _repr

    def to_dict(self):
        """
        Convert the schedule to a dictionary.

        Returns
        -------
        dict
            ``{'project_finish': int, 'tasks': [...], 'critical_edges': [...]}``
            with tasks in topological order.
        """
        critical = self.critical_edges
        return {
            'project_finish': self.project_finish,
            'tasks'         : [self.times[id].to_dict() for id in self.order],
            'critical_edges': [list(e) for e in self.edges if e in critical],
        }

    def to_dataframe(self):
        """
        Convert the time table to a pandas DataFrame.

        Rows follow the topological order, one column per
        :meth:`TaskTimes.to_dict` field.
        """
        columns = ['id', 'description', 'duration', 'early_start',
                   'early_finish', 'late_start', 'late_finish', 'slack',
                   'critical']
        return pd.DataFrame([self.times[id].to_dict() for id in self.order],
                            columns=columns)

#==============================================================================
class CpmOutcome:
    """Either a computed schedule (``ok`` is True) or a :class:`CpmError`."""
    def __init__(self, schedule=None, error=None):
        assert (schedule is None) != (error is None)
        self.schedule = schedule
        self.error    = error

    @property
    def ok(self):
        return self.error is None

    def __repr__(self):
        if self.ok:
            return f'CpmOutcome(ok, project_finish={self.schedule.project_finish})'
        return f'CpmOutcome(error={self.error!r})'

#==============================================================================
class CpmEngine:
    """
    Critical Path Method computation over a :class:`DependencyGraph`.

    Vertex payloads must have an integer ``duration`` attribute and may have
    a ``description`` one. The engine keeps no state between calls.

    Examples
    --------
    >>> outcome = CpmEngine().evaluate(graph)
    >>> if outcome.ok:
    ...     print(outcome.schedule.critical_nodes)
    ... else:
    ...     print(outcome.error)
    """

    def validate(self, graph):
        """
        Check that ``graph`` can be scheduled.

        Checks are done in order: link endpoints, cycles, durations.

        Returns
        -------
        list
            Vertex ids in topological order

        Raises
        ------
        UnknownNodeReference
            If a link references a missing vertex
        CyclicDependency
            If the links contain a directed cycle
        InvalidDuration
            If a duration is negative or not an integer
        """
        order, _ = self._validate(graph)
        return order

    def compute(self, graph):
        """
        Validate ``graph`` and compute the CPM schedule.

        Returns
        -------
        CpmSchedule

        Raises
        ------
        CpmError
            See :meth:`validate`; nothing is computed in this case
        """
        order, dur = self._validate(graph)

        n   = len(order)
        pos = {id: i for i, id in enumerate(order)}

        es = np.zeros((n,), dtype=np.int64)
        ef = np.zeros((n,), dtype=np.int64)
        ls = np.zeros((n,), dtype=np.int64)
        lf = np.zeros((n,), dtype=np.int64)

        # Forward pass, every predecessor is already done
        for i, id in enumerate(order):
            es[i] = max((ef[pos[p]] for p in graph.predecessors.get(id, _EMPTY)), default=0)
            ef[i] = es[i] + dur[i]

        project_finish = int(ef.max()) if n else 0

        # Backward pass, every successor is already done
        for i in range(n - 1, -1, -1):
            succ = graph.successors.get(order[i], _EMPTY)
            lf[i] = min((ls[pos[s]] for s in succ), default=project_finish)
            ls[i] = lf[i] - dur[i]

        slack = ls - es

        # Check for programming errors
        if n and (slack < 0).any():
            raise RuntimeError("Tasks can not have negative slack!!!")

        times = {}
        for i, id in enumerate(order):
            times[id] = TaskTimes(id,
                                  getattr(graph.vertices[id], 'description', ''),
                                  int(dur[i]),
                                  int(es[i]), int(ef[i]),
                                  int(ls[i]), int(lf[i]),
                                  int(slack[i]))

        return CpmSchedule(times, order, project_finish, list(graph.edges()),
                           graph.is_weakly_connected())

    def evaluate(self, graph):
        """
        Same as :meth:`compute` but returns a :class:`CpmOutcome` instead of
        raising validation errors.
        """
        try:
            return CpmOutcome(schedule=self.compute(graph))
        except CpmError as e:
            return CpmOutcome(error=e)

    #--------------------------------------------------------------------------
    def _validate(self, graph):
        for id in graph.referenced_ids():
            if id not in graph.vertices:
                raise UnknownNodeReference(id)

        order = self._topological_order(graph)

        dur = np.zeros((len(order),), dtype=np.int64)
        for i, id in enumerate(order):
            dur[i] = check_duration(id, getattr(graph.vertices[id], 'duration', None))

        return order, dur

    def _topological_order(self, graph):
        """
        Depth-first walk over successors, raises :class:`CyclicDependency`
        when a vertex on the current path is reached again.

        The walk uses an explicit stack so long chains do not hit the
        recursion limit.
        """
        state = {}
        post  = []

        for root in graph.vertices:
            if root in state:
                continue

            state[root] = _ACTIVE
            stack = [(root, iter(graph.successors.get(root, _EMPTY)))]
            while stack:
                v, it = stack[-1]
                for s in it:
                    st = state.get(s, _NEW)
                    if _ACTIVE == st:
                        raise CyclicDependency(s)
                    if _NEW == st:
                        state[s] = _ACTIVE
                        stack.append((s, iter(graph.successors.get(s, _EMPTY))))
                        break
                else:
                    state[v] = _DONE
                    post.append(v)
                    stack.pop()

        post.reverse()
        return post

#==============================================================================
def compute_cpm(graph):
    """Shortcut for ``CpmEngine().compute(graph)``."""
    return CpmEngine().compute(graph)
