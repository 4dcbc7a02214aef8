# -*- coding: utf-8 -*-
# ARQUIVO: main.py

import logging
import sys
import time

import gurobipy as gp

from wave_picking.config import LOG_FILE, SOLVER_TIME_LIMIT_SEC, SolverConfig
from wave_picking.data_parser import InstanceParser, SolutionWriter
from wave_picking.solver import WaveSolver

logger = logging.getLogger(__name__)

CONSOLE_HANDLER_NAME = "wave_picking.console"
USAGE = "Uso: wave-picking <arquivo_de_entrada> [arquivo_de_saida] [limite_de_tempo_seg]"


def setup_logging(log_file: str = LOG_FILE):
    """
    Log em arquivo (sobrescrito a cada execução) e também no console.
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        filename=log_file,
        filemode='w'
    )
    root = logging.getLogger()
    if any(handler.get_name() == CONSOLE_HANDLER_NAME for handler in root.handlers):
        return
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
    root.addHandler(console_handler)


def run_challenge(input_file: str, output_file: str = None,
                  time_limit: float = SOLVER_TIME_LIMIT_SEC) -> bool:
    """
    Função principal que orquestra a execução do desafio.

    1. Faz o parsing da instância.
    2. Cria e resolve o modelo de otimização.
    3. Salva a solução.

    Returns:
        True se uma solução foi aceita.
    """
    start_time = time.monotonic()
    logger.info("--- INICIANDO DESAFIO DE OTIMIZAÇÃO DE WAVE ---")
    try:
        instance = InstanceParser.parse(input_file)
        solver = WaveSolver(instance, SolverConfig(solver_time_limit_sec=time_limit))
        result = solver.solve(elapsed=lambda: time.monotonic() - start_time)

        if not result.ok:
            logger.error(f"Nenhuma solução aceita. Motivo: {result.failure.value}")
            return False

        if output_file:
            SolutionWriter.write(result.solution, output_file)
        return True

    except (FileNotFoundError, ValueError) as e:
        logger.error(f"ERRO DE ARQUIVO/DADOS: {e}")
    except gp.GurobiError as e:
        logger.error(f"ERRO DO GUROBI: {e.errno} - {e.message}")
    finally:
        logger.info("--- EXECUÇÃO FINALIZADA ---")
    return False


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(USAGE)
        return 2

    input_f = argv[0]
    output_f = argv[1] if len(argv) > 1 else None
    try:
        time_sec = float(argv[2]) if len(argv) > 2 else SOLVER_TIME_LIMIT_SEC
    except ValueError:
        print(f"Limite de tempo inválido: {argv[2]}")
        print(USAGE)
        return 2

    setup_logging()
    return 0 if run_challenge(input_file=input_f, output_file=output_f, time_limit=time_sec) else 1


if __name__ == '__main__':
    sys.exit(main())
