# -*- coding: utf-8 -*-
# ARQUIVO: solver.py

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import gurobipy as gp

from wave_picking.checker import compute_objective_function, find_violation
from wave_picking.config import SolverConfig
from wave_picking.engine import EngineResult, EngineStatus, GurobiEngine, OptimizationEngine
from wave_picking.errors import FailureReason
from wave_picking.formulation import build_formulation
from wave_picking.model import Instance, WaveSolution

logger = logging.getLogger(__name__)

# Limiar para arredondar o valor de uma variável binária.
SELECTION_THRESHOLD = 0.5


@dataclass(frozen=True)
class SolveResult:
    """
    Resultado de uma resolução: a solução aceita com o seu valor real de
    objetivo, ou o motivo da falha.

    `proven_optimal` é False quando a solução veio de uma execução
    interrompida pelo limite de tempo.
    """
    solution: Optional[WaveSolution] = None
    objective: float = 0.0
    total_units: int = 0
    failure: Optional[FailureReason] = None
    proven_optimal: bool = False
    engine_objective: Optional[float] = None
    mip_gap: Optional[float] = None
    runtime: float = 0.0

    @property
    def ok(self) -> bool:
        return self.failure is None and self.solution is not None


def extract_solution(result: EngineResult) -> Optional[WaveSolution]:
    """
    Converte os valores das variáveis do otimizador em uma solução.
    Retorna None se o otimizador não tiver solução incumbente.
    """
    if not result.has_incumbent:
        return None
    selected_orders = [i for i, value in enumerate(result.order_values) if value > SELECTION_THRESHOLD]
    visited_aisles = [j for j, value in enumerate(result.aisle_values) if value > SELECTION_THRESHOLD]
    return WaveSolution(orders=frozenset(selected_orders), aisles=frozenset(visited_aisles))


class WaveSolver:
    """
    Orquestra a resolução de uma wave: constrói o modelo, chama o
    otimizador, extrai a solução e a valida contra a definição original do
    problema antes de aceitá-la.
    """

    def __init__(self, instance: Instance, config: SolverConfig = None,
                 engine: OptimizationEngine = None):
        self.instance = instance
        self.config = config or SolverConfig()
        self.engine = engine or GurobiEngine(output_flag=self.config.output_flag,
                                             iis_path=self.config.iis_path)

    def get_remaining_time(self, elapsed_sec: float) -> float:
        """Tempo restante (em segundos) do orçamento total do processo."""
        return max(self.config.max_runtime_sec - elapsed_sec, 0.0)

    def _failure(self, reason: FailureReason, result: EngineResult = None) -> SolveResult:
        return SolveResult(
            failure=reason,
            engine_objective=result.objective if result else None,
            mip_gap=result.mip_gap if result else None,
            runtime=result.runtime if result else 0.0,
        )

    def solve(self, elapsed: Callable[[], float] = None) -> SolveResult:
        """
        Executa uma única tentativa de resolução.

        Args:
            elapsed: Função que retorna o tempo (s) já consumido pelo processo.
                Se omitida, o tempo é contado a partir desta chamada.
        """
        start_time = time.monotonic()
        if elapsed is None:
            def elapsed():
                return time.monotonic() - start_time

        if self.instance.num_orders == 0 or self.instance.num_aisles == 0:
            logger.warning("Instância sem pedidos ou sem corredores: nenhuma wave possível.")
            return self._failure(FailureReason.NO_FEASIBLE_ASSIGNMENT)

        formulation = None
        try:
            formulation = build_formulation(self.instance)
            time_budget = self.config.engine_budget(elapsed())
            if time_budget <= 0:
                logger.warning("Orçamento de tempo esgotado antes da otimização.")
                return self._failure(FailureReason.TIME_BUDGET_EXHAUSTED)

            result = self.engine.solve(formulation, time_limit=time_budget,
                                       mip_gap=self.config.mip_gap, threads=self.config.threads)
        except gp.GurobiError as e:
            logger.error(f"Erro do Gurobi: {e.errno} - {e.message}")
            return self._failure(FailureReason.ENGINE_FAILURE)
        finally:
            if formulation is not None:
                formulation.dispose()

        return self._accept(result, elapsed)

    def _accept(self, result: EngineResult, elapsed: Callable[[], float]) -> SolveResult:
        if result.status is EngineStatus.ERROR:
            logger.error(f"Falha do otimizador: {result.message or 'erro interno'}")
            return self._failure(FailureReason.ENGINE_FAILURE, result)

        solution = extract_solution(result)
        if solution is None:
            if result.status is EngineStatus.INFEASIBLE:
                logger.warning("Solução não encontrada: o modelo é inviável.")
                return self._failure(FailureReason.NO_FEASIBLE_ASSIGNMENT, result)
            if result.status is EngineStatus.TIME_LIMIT:
                logger.warning("Limite de tempo atingido, mas nenhuma solução viável foi encontrada.")
                return self._failure(FailureReason.TIME_BUDGET_EXHAUSTED, result)
            logger.error(f"O otimizador terminou sem solução (status {result.status.value}).")
            return self._failure(FailureReason.ENGINE_FAILURE, result)

        if solution.is_empty:
            # Com LB = 0 o corte de linearização pode preferir N = 0 a uma wave viável.
            logger.error(
                f"O otimizador retornou uma wave vazia ({len(solution.orders)} pedidos, "
                f"{len(solution.aisles)} corredores); solução rejeitada."
            )
            return self._failure(FailureReason.POST_SOLVE_INFEASIBLE, result)

        violation = find_violation(self.instance, solution)
        if violation is not None:
            logger.error(
                f"Solução do otimizador REJEITADA na verificação de viabilidade: {violation} "
                f"O modelo linear e a definição do problema divergiram."
            )
            return self._failure(FailureReason.POST_SOLVE_INFEASIBLE, result)

        proven_optimal = result.status is EngineStatus.OPTIMAL
        if not proven_optimal:
            logger.warning(f"Solução aceita sem prova de otimalidade (status {result.status.value}).")

        objective = compute_objective_function(self.instance, solution)
        total_units = sum(self.instance.orders[o_id].total_units for o_id in solution.orders)

        logger.info(f"Tempo restante: {self.get_remaining_time(elapsed()):.0f} segundos")
        logger.info(f"Valor da função objetivo: {objective:.4f}")
        logger.info(
            f"Pedidos na wave: {len(solution.orders)}, unidades: {total_units}, "
            f"corredores visitados: {len(solution.aisles)}"
        )

        return SolveResult(
            solution=solution,
            objective=objective,
            total_units=total_units,
            proven_optimal=proven_optimal,
            engine_objective=result.objective,
            mip_gap=result.mip_gap,
            runtime=result.runtime,
        )
