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

#==============================================================================
class CpmError(ValueError):
    """
    Base class for errors that make a network unschedulable.

    Attributes
    ----------
    node_id : hashable
        Identifier of the task that caused the error
    """
    kind = 'CpmError'

    def __init__(self, node_id, message=None):
        self.node_id = node_id
        if message is None:
            message = self._default_message(node_id)
        super().__init__(message)

    def _default_message(self, node_id):
        return f"{self.kind}: {node_id!r}"

#==============================================================================
class UnknownNodeReference(CpmError):
    """A dependency link references a task that does not exist."""
    kind = 'UnknownNodeReference'

    def _default_message(self, node_id):
        return f"Dependency references unknown task {node_id!r}"

#==============================================================================
class CyclicDependency(CpmError):
    """The dependency links contain a directed cycle through ``node_id``."""
    kind = 'CyclicDependency'

    def _default_message(self, node_id):
        return f"Cyclic dependency detected at task {node_id!r}"

#==============================================================================
class InvalidDuration(CpmError):
    """A task duration is negative, too large or not an integer."""
    kind = 'InvalidDuration'

    def _default_message(self, node_id):
        return f"Task {node_id!r}: duration must be a non-negative integer below 2**31"
