#!/usr/bin/env python3
"""
Ordering and running tasks.

The requested tasks and their transitive dependencies form a graph,
with an edge from each dependency to its dependent.
Tasks run in topological order, stopping at the first failure.
"""
##-- imports
from __future__ import annotations

import logging as logmod
import pathlib as pl

import networkx as nx
from tomlguard import TomlGuard

from crowtasks._interface import FAIL_PRINTER_NAME, PRINTER_NAME
from crowtasks.control.registry import TaskRegistry
from crowtasks.enums import TaskStatus_e
from crowtasks.errors import CrowError, TaskError
from crowtasks.structs.project_spec import ProjectSpec
##-- end imports

##-- logging
logging = logmod.getLogger(__name__)
printer = logmod.getLogger(PRINTER_NAME)
fail_l  = logmod.getLogger(FAIL_PRINTER_NAME)
##-- end logging

class TaskRunner:
    """ Builds the dependency graph for a set of tasks, and runs it """

    def __init__(self, registry:TaskRegistry, config:TomlGuard, project:ProjectSpec, *, state_dir:pl.Path):
        self.registry  = registry
        self.config    = config
        self.project   = project
        self.state_dir = state_dir
        self.results   : dict[str, TaskStatus_e] = {}

    def graph(self, targets:list[str]) -> nx.DiGraph:
        graph   = nx.DiGraph()
        queue   = list(targets)
        while bool(queue):
            current = queue.pop()
            if current in graph and graph.nodes[current].get("expanded", False):
                continue

            task = self.registry[current]
            graph.add_node(current, expanded=True)
            for dep in task.depends_on:
                if dep not in self.registry:
                    raise TaskError("Task %s depends on unknown task: %s", current, dep, task=current)
                graph.add_edge(dep, current)
                queue.append(dep)

        if not nx.is_directed_acyclic_graph(graph):
            cycle = nx.find_cycle(graph)
            raise TaskError("Task dependencies form a cycle: %s", " -> ".join(x for x,_ in cycle))

        return graph

    def plan(self, targets:list[str]) -> list[str]:
        """ The order to run tasks in, ties broken by name """
        return list(nx.lexicographical_topological_sort(self.graph(targets)))

    def run(self, targets:list[str]) -> dict[str, TaskStatus_e]:
        plan = self.plan(targets)
        logging.info("Task Plan: %s", plan)
        for name in plan:
            task = self.registry[name](self.config, self.project, state_dir=self.state_dir)
            try:
                self.results[name] = task.run()
            except CrowError as err:
                self.results[name] = TaskStatus_e.FAILED
                fail_l.error("Task Failed: %s : %s", name, err)
                raise

        return self.results
