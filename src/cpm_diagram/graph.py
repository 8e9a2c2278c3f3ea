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

_EMPTY = frozenset()

#==============================================================================
class DependencyGraph:
    """
    Directed graph with a payload per vertex.

    Every edge is stored twice, once in ``successors`` of its source and once
    in ``predecessors`` of its destination, so that neighbour lookup is O(1)
    in both directions.

    Edges may be added before their vertices. Such dangling references are
    tolerated here and reported by :meth:`CpmEngine.validate`.

    Attributes
    ----------
    vertices : dict
        Vertex id -> payload
    successors : dict
        Vertex id -> set of ids that can start only after it finishes
    predecessors : dict
        Vertex id -> set of ids that must finish before it starts
    """
    def __init__(self):
        self.vertices     = {}
        self.successors   = {}
        self.predecessors = {}

    @classmethod
    def from_tasks(cls, tasks):
        """
        Build a graph from tasks listing their predecessors.

        All vertices are added first, then every ``predecessor -> task`` link
        is connected.
        """
        graph = cls()
        for t in tasks:
            graph.add_vertex(t.id, t)
        for t in tasks:
            for p in t.predecessors:
                graph.connect(p, t.id)
        return graph

    #--------------------------------------------------------------------------
    def add_vertex(self, id, payload):
        """Insert or replace the payload of ``id``."""
        self.vertices[id] = payload

    def connect(self, src, dst):
        """Add ``src -> dst`` edge, repeated calls have no effect."""
        self.successors.setdefault(src, set()).add(dst)
        self.predecessors.setdefault(dst, set()).add(src)

    def successors_of(self, id):
        return frozenset(self.successors.get(id, _EMPTY))

    def predecessors_of(self, id):
        return frozenset(self.predecessors.get(id, _EMPTY))

    def payload(self, id):
        return self.vertices[id]

    #--------------------------------------------------------------------------
    def edges(self):
        """Iterate over ``(src, dst)`` pairs."""
        for src, dsts in self.successors.items():
            for dst in dsts:
                yield src, dst

    def referenced_ids(self):
        """Return a set of all ids mentioned by edges."""
        ids = set(self.successors.keys())
        ids.update(self.predecessors.keys())
        return ids

    def is_weakly_connected(self):
        """
        Check that the graph has at most one component when edge directions
        are ignored.

        This is a diagnostic for orphan tasks. A cyclic graph may pass it,
        use :meth:`CpmEngine.validate` to check that the graph can be
        scheduled.
        """
        if len(self.vertices) < 2:
            return True

        start = next(iter(self.vertices))
        seen  = {start}
        stack = [start]
        while stack:
            v = stack.pop()
            for n in self.successors.get(v, _EMPTY) | self.predecessors.get(v, _EMPTY):
                if n not in seen:
                    seen.add(n)
                    stack.append(n)

        return all(v in seen for v in self.vertices)

    #--------------------------------------------------------------------------
    def __len__(self):
        return len(self.vertices)

    def __contains__(self, id):
        return id in self.vertices

    def __iter__(self):
        return iter(self.vertices)

    def __repr__(self):
        n_edges = sum(len(s) for s in self.successors.values())
        return f"DependencyGraph(vertices={len(self.vertices)}, edges={n_edges})"
