# -*- coding: utf-8 -*-
"""
Seleção ótima de pedidos e corredores para uma wave de picking.
"""

from wave_picking.checker import compute_objective_function, is_solution_feasible
from wave_picking.errors import FailureReason, ModelConstructionError
from wave_picking.model import Aisle, Instance, Order, WaveBounds, WaveSolution
from wave_picking.solver import SolveResult, WaveSolver

__all__ = [
    'Aisle',
    'FailureReason',
    'Instance',
    'ModelConstructionError',
    'Order',
    'SolveResult',
    'WaveBounds',
    'WaveSolution',
    'WaveSolver',
    'compute_objective_function',
    'is_solution_feasible',
]
