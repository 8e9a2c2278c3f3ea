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
import logging
import os

import pandas as pd

from .graph import DependencyGraph
from .task import Task

logger = logging.getLogger(__name__)

#==============================================================================
class ConfigError(ValueError):
    """The task definition file can not be read or is malformed."""

#==============================================================================
def _is_task_id(value):
    return isinstance(value, (str, int)) and not isinstance(value, bool)

def _task_from_dict(path, i, item):
    if not isinstance(item, dict):
        raise ConfigError(f"{path}: task #{i} must be an object")
    if 'id' not in item:
        raise ConfigError(f"{path}: task #{i} has no 'id'")
    if not _is_task_id(item['id']):
        raise ConfigError(f"{path}: task #{i}: 'id' must be a string or an integer")
    if 'duration' not in item:
        raise ConfigError(f"{path}: task {item['id']!r} has no 'duration'")

    description = item.get('description', '')
    if not isinstance(description, str):
        raise ConfigError(f"{path}: task {item['id']!r}: 'description' must be a string")

    predecessors = item.get('predecessors', [])
    if not isinstance(predecessors, list):
        raise ConfigError(f"{path}: task {item['id']!r}: 'predecessors' must be a list")
    for p in predecessors:
        if not _is_task_id(p):
            raise ConfigError(f"{path}: task {item['id']!r}: predecessor {p!r} must be a string or an integer")

    return Task(item['id'], description, item['duration'], predecessors)

def _load_json(path):
    with open(path, encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: couldn't parse JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"{path}: file is not UTF-8 encoded: {e}") from e

    if not isinstance(data, list):
        raise ConfigError(f"{path}: top level value must be a list of tasks")

    return [_task_from_dict(path, i, item) for i, item in enumerate(data, 1)]

def _load_csv(path):
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ConfigError(f"{path}: couldn't parse CSV: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: file is not UTF-8 encoded: {e}") from e

    missing = [c for c in ('id', 'duration') if c not in df.columns]
    if missing:
        raise ConfigError(f"{path}: missing columns: {', '.join(missing)}")

    tasks = []
    for row in df.to_dict('records'):
        try:
            duration = int(row['duration'])
        except ValueError:
            raise ConfigError(f"{path}: task {row['id']!r}: 'duration' must be an integer") from None

        predecessors = [p.strip() for p in row.get('predecessors', '').split(',') if p.strip()]
        tasks.append(Task(row['id'], row.get('description', ''), duration, predecessors))

    return tasks

#==============================================================================
def load_tasks(path):
    """
    Load task definitions from a file.

    Parameters
    ----------
    path : str or os.PathLike
        Path to a ``.json`` or ``.csv`` file.

        JSON files hold a list of objects with ``id``, ``duration`` and
        optional ``description`` and ``predecessors`` (list of ids) fields.
        CSV files have the same columns, predecessors are comma separated
        inside one cell.

    Returns
    -------
    list
        List of :class:`Task` objects in file order

    Raises
    ------
    ConfigError
        If the file format is unsupported or the content is malformed
    InvalidDuration
        If a task duration is negative or not an integer
    OSError
        If the file can not be read
    """
    ext = os.path.splitext(str(path))[1].lower()
    if '.json' == ext:
        tasks = _load_json(path)
    elif '.csv' == ext:
        tasks = _load_csv(path)
    else:
        raise ConfigError(f"{path}: unsupported task file format {ext!r}")

    logger.debug("Loaded %d tasks from %s", len(tasks), path)
    return tasks

def build_graph(tasks):
    """Build a :class:`DependencyGraph` from loaded tasks."""
    return DependencyGraph.from_tasks(tasks)
