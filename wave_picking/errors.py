# -*- coding: utf-8 -*-
# ARQUIVO: errors.py

from enum import Enum


class ModelConstructionError(ValueError):
    """
    Instância malformada (item fora de [0, num_items), quantidade negativa,
    limites da wave inválidos). Nenhuma tentativa de resolução é feita.
    """


class FailureReason(Enum):
    """Motivos pelos quais uma resolução não produz solução aceita."""
    ENGINE_FAILURE = "engine_failure"
    NO_FEASIBLE_ASSIGNMENT = "no_feasible_assignment"
    TIME_BUDGET_EXHAUSTED = "time_budget_exhausted"
    POST_SOLVE_INFEASIBLE = "post_solve_infeasible"
