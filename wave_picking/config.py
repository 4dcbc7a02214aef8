# -*- coding: utf-8 -*-
# ARQUIVO: config.py
"""
Configurações de execução do solver.
"""

from dataclasses import dataclass
from typing import Optional

# Orçamento total do processo (10 minutos).
MAX_RUNTIME_SEC = 600

# Orçamento interno do Gurobi; a diferença fica para extração, validação e escrita.
SOLVER_TIME_LIMIT_SEC = 540

# Exige certificado de otimalidade praticamente exato.
MIP_GAP = 1e-15

# 0 = o Gurobi usa todos os núcleos disponíveis.
THREADS = 0

LOG_FILE = 'wave_picking.log'


@dataclass(frozen=True)
class SolverConfig:
    max_runtime_sec: float = MAX_RUNTIME_SEC
    solver_time_limit_sec: float = SOLVER_TIME_LIMIT_SEC
    mip_gap: float = MIP_GAP
    threads: int = THREADS
    output_flag: bool = True
    iis_path: Optional[str] = None

    @property
    def headroom_sec(self) -> float:
        """Folga reservada fora do Gurobi dentro do orçamento total."""
        return max(self.max_runtime_sec - self.solver_time_limit_sec, 0.0)

    def engine_budget(self, elapsed_sec: float) -> float:
        """
        Tempo que pode ser entregue ao Gurobi, dado o tempo já consumido
        pelo processo.
        """
        remaining = self.max_runtime_sec - elapsed_sec - self.headroom_sec
        return max(min(self.solver_time_limit_sec, remaining), 0.0)
