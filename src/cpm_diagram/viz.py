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
import html
import logging

import graphviz

logger = logging.getLogger(__name__)

FORMATS = ('png', 'svg', 'dot')

CRITICAL_COLOR = 'red'

_LABEL = '''<
<table border="0" cellborder="1" cellspacing="0">
    <tr><td width="40" height="30">{early_start}</td><td height="30">{id}</td><td height="30">{early_finish}</td></tr>
    <tr><td width="40" height="30">{slack}</td><td colspan="2" height="30">{description}</td></tr>
    <tr><td width="40" height="30">{late_start}</td><td height="30">{duration}</td><td height="30">{late_finish}</td></tr>
</table>
>'''

#==============================================================================
def node_label(times):
    """
    Build an HTML-like Graphviz label for one task.

    Layout::

        +-------------+-------------+--------------+
        | early start |     id      | early finish |
        +-------------+-------------+--------------+
        |    slack    |       description          |
        +-------------+-------------+--------------+
        | late start  |  duration   | late finish  |
        +-------------+-------------+--------------+
    """
    return _LABEL.format(early_start=times.early_start,
                         id=html.escape(str(times.id)),
                         early_finish=times.early_finish,
                         slack=times.slack,
                         description=html.escape(times.description),
                         late_start=times.late_start,
                         duration=times.duration,
                         late_finish=times.late_finish)

def node_names(schedule):
    """
    Map task ids to Graphviz node names.

    Names follow the topological order, task ids are shown only in labels
    since ids like ``a:b`` would be read as node ports.
    """
    return {id: f'node_{i}' for i, id in enumerate(schedule.order)}

def to_digraph(schedule, strict=False):
    """
    Create Graphviz network diagram of a computed schedule.

    Parameters
    ----------
    schedule : CpmSchedule
        Computed schedule
    strict : bool, default=False
        Highlight only links lying on a longest path
        (:meth:`CpmSchedule.strict_critical_edges`) instead of all links
        between zero slack tasks

    Returns
    -------
    graphviz.Digraph
        Graphviz object for rendering or saving
    """
    dot = graphviz.Digraph('network_diagram', strict=True,
                           node_attr={'shape': 'plaintext'})
    dot.graph_attr['bgcolor'] = 'transparent'

    names = node_names(schedule)
    for id in schedule.order:
        dot.node(names[id], node_label(schedule[id]))

    critical = schedule.strict_critical_edges() if strict else schedule.critical_edges

    for src, dst in schedule.edges:
        if (src, dst) in critical:
            dot.edge(names[src], names[dst], color=CRITICAL_COLOR, penwidth='2')
        else:
            dot.edge(names[src], names[dst])

    logger.debug("Diagram has %d nodes, %d critical links", len(schedule), len(critical))
    return dot

def render(dot, fmt='png'):
    """
    Render a diagram to bytes.

    ``dot`` format returns the diagram description itself, other formats run
    the Graphviz ``dot`` executable.

    Raises
    ------
    ValueError
        If ``fmt`` is not one of :data:`FORMATS`
    graphviz.ExecutableNotFound
        If Graphviz is not installed
    graphviz.CalledProcessError
        If Graphviz fails
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format {fmt!r}, expected one of {', '.join(FORMATS)}")

    if 'dot' == fmt:
        return dot.source.encode('utf-8')

    return dot.pipe(format=fmt)
