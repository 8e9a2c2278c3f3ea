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
import argparse
import logging
import sys

import graphviz

from .config import ConfigError, build_graph, load_tasks
from .errors import CpmError
from .net_model import CpmEngine
from .viz import FORMATS, render, to_digraph

logger = logging.getLogger(__name__)

#==============================================================================
def make_parser():
    parser = argparse.ArgumentParser(
        prog='cpm-diagram',
        description="Compute the critical path of a task network and draw it")
    parser.add_argument('config_file', metavar='FILE',
                        help="Task definition file (.json or .csv)")
    parser.add_argument('-o', '--output', default='graph',
                        help="Output file path (default: %(default)s)")
    parser.add_argument('-f', '--format', choices=FORMATS, default='png',
                        help="Output format (default: %(default)s)")
    parser.add_argument('--strict', action='store_true',
                        help="Highlight only links lying on a longest path")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Same as --log-level INFO")
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help="Logging level (default: %(default)s)")
    return parser

def run(args):
    """Run one diagram generation, returns process exit status."""
    try:
        tasks = load_tasks(args.config_file)
    except (ConfigError, CpmError, OSError) as e:
        logger.error("Couldn't load tasks: %s", e)
        return 1

    outcome = CpmEngine().evaluate(build_graph(tasks))
    if not outcome.ok:
        logger.error("Couldn't compute the critical path: %s", outcome.error)
        return 1

    schedule = outcome.schedule
    if not schedule.weakly_connected:
        logger.warning("Task network is not connected, some tasks are independent of the rest")
    logger.info("Project finish: %d, critical tasks: %s", schedule.project_finish,
                ', '.join(str(id) for id in schedule.order if schedule[id].is_critical))

    try:
        data = render(to_digraph(schedule, strict=args.strict), args.format)
    except (graphviz.ExecutableNotFound, graphviz.CalledProcessError) as e:
        logger.error("Couldn't generate graph: %s", e)
        return 1

    try:
        with open(args.output, 'wb') as f:
            f.write(data)
    except OSError as e:
        logger.error("Couldn't write %s: %s", args.output, e)
        return 1

    print(f"{args.output} has been created.")
    return 0

def main(argv=None):
    args = make_parser().parse_args(argv)

    level = 'INFO' if args.verbose and 'WARNING' == args.log_level else args.log_level
    logging.basicConfig(level=level, format='[%(levelname)s] %(name)s: %(message)s')

    return run(args)

#==============================================================================
if __name__ == '__main__':
    sys.exit(main())
