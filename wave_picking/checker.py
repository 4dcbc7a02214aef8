# -*- coding: utf-8 -*-
# ARQUIVO: checker.py
"""
Verificação independente de soluções: viabilidade e valor real do objetivo,
recalculados a partir dos dados da instância, sem depender do modelo linear.
"""

from collections import Counter
from typing import Optional

from wave_picking.model import Instance, WaveSolution


def find_violation(instance: Instance, solution: WaveSolution) -> Optional[str]:
    """
    Retorna a descrição da primeira restrição violada pela solução, ou None
    se a solução for viável.
    """
    if solution.is_empty:
        return "A wave precisa de pelo menos um pedido e um corredor."

    unknown_orders = [o for o in solution.orders if not 0 <= o < instance.num_orders]
    if unknown_orders:
        return f"Pedidos inexistentes na instância: {sorted(unknown_orders)}"
    unknown_aisles = [a for a in solution.aisles if not 0 <= a < instance.num_aisles]
    if unknown_aisles:
        return f"Corredores inexistentes na instância: {sorted(unknown_aisles)}"

    total_units_picked = Counter()
    for order_id in solution.orders:
        total_units_picked.update(instance.orders[order_id].items)

    total_units_available = Counter()
    for aisle_id in solution.aisles:
        total_units_available.update(instance.aisles[aisle_id].inventory)

    total_units = sum(total_units_picked.values())
    if not instance.bounds.contains(total_units):
        return (f"Total de unidades {total_units} fora dos limites "
                f"[{instance.min_wave_size}, {instance.max_wave_size}].")

    for item_id, picked in sorted(total_units_picked.items()):
        if picked > total_units_available[item_id]:
            return f"Item {item_id}: demanda {picked} > disponível {total_units_available[item_id]}."

    return None


def is_solution_feasible(instance: Instance, solution: WaveSolution) -> bool:
    return find_violation(instance, solution) is None


def compute_objective_function(instance: Instance, solution: WaveSolution) -> float:
    """Unidades coletadas / corredores visitados. 0.0 se algum lado estiver vazio."""
    if solution.is_empty:
        return 0.0
    total_units_picked = sum(instance.orders[order_id].total_units for order_id in solution.orders)
    return total_units_picked / len(solution.aisles)
