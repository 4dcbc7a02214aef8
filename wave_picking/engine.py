# -*- coding: utf-8 -*-
# ARQUIVO: engine.py

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import gurobipy as gp
from gurobipy import GRB

from wave_picking.formulation import WaveFormulation

logger = logging.getLogger(__name__)


class EngineStatus(Enum):
    OPTIMAL = "optimal"
    TIME_LIMIT = "time_limit"
    INFEASIBLE = "infeasible"
    ERROR = "error"
    OTHER = "other"


@dataclass
class EngineResult:
    """
    Resultado bruto do otimizador. Os valores das variáveis só existem quando
    há uma solução incumbente.
    """
    status: EngineStatus
    order_values: List[float] = field(default_factory=list)
    aisle_values: List[float] = field(default_factory=list)
    objective: Optional[float] = None
    mip_gap: Optional[float] = None
    solution_count: int = 0
    runtime: float = 0.0
    message: str = ""

    @property
    def has_incumbent(self) -> bool:
        return self.solution_count > 0


class OptimizationEngine:
    """
    Interface do otimizador externo. Qualquer solver MIP que respeite este
    contrato pode ser usado pelo WaveSolver.
    """

    def solve(self, formulation: WaveFormulation, time_limit: float, mip_gap: float,
              threads: int = 0) -> EngineResult:
        raise NotImplementedError


class GurobiEngine(OptimizationEngine):
    """Resolve o modelo com o Gurobi."""

    _STATUS_MAP = {
        GRB.OPTIMAL: EngineStatus.OPTIMAL,
        GRB.TIME_LIMIT: EngineStatus.TIME_LIMIT,
        GRB.INFEASIBLE: EngineStatus.INFEASIBLE,
        # Z é limitado pelo corte de linearização, então INF_OR_UNBD só ocorre sem ponto viável.
        GRB.INF_OR_UNBD: EngineStatus.INFEASIBLE,
        GRB.NUMERIC: EngineStatus.ERROR,
    }

    def __init__(self, output_flag: bool = True, iis_path: Optional[str] = None):
        self.output_flag = output_flag
        self.iis_path = iis_path

    def solve(self, formulation: WaveFormulation, time_limit: float, mip_gap: float,
              threads: int = 0) -> EngineResult:
        model = formulation.model
        try:
            model.setParam('OutputFlag', int(self.output_flag))
            model.setParam('TimeLimit', time_limit)
            model.setParam('MIPGap', mip_gap)
            model.setParam('Threads', threads)

            logger.info(f"Iniciando otimização com limite de tempo de {time_limit:.1f} segundos...")
            model.optimize()

            status = self._STATUS_MAP.get(model.Status, EngineStatus.OTHER)
            logger.info(f"Status do Gurobi: {model.Status} ({status.value}), soluções: {model.SolCount}.")

            if status is EngineStatus.INFEASIBLE and self.iis_path:
                self._write_iis(model)

            if model.SolCount == 0:
                return EngineResult(status=status, runtime=model.Runtime)

            return EngineResult(
                status=status,
                order_values=[formulation.x[i].X for i in range(formulation.num_orders)],
                aisle_values=[formulation.y[j].X for j in range(formulation.num_aisles)],
                objective=model.ObjVal,
                mip_gap=model.MIPGap,
                solution_count=model.SolCount,
                runtime=model.Runtime,
            )
        except gp.GurobiError as e:
            logger.error(f"Erro do Gurobi: {e.errno} - {e.message}")
            return EngineResult(status=EngineStatus.ERROR, message=f"{e.errno} - {e.message}")

    def _write_iis(self, model: gp.Model):
        model.computeIIS()
        model.write(self.iis_path)
        logger.info(f"Um subconjunto de restrições conflitantes foi salvo em '{self.iis_path}'")
