# -*- coding: utf-8 -*-
# ARQUIVO: formulation.py

import logging
from dataclasses import dataclass

import gurobipy as gp
from gurobipy import GRB

from wave_picking.model import Instance

logger = logging.getLogger(__name__)


@dataclass
class WaveFormulation:
    """
    Modelo do Gurobi pronto para ser otimizado, com referências às variáveis
    de decisão. Cada resolução constrói o seu próprio modelo.

    Attributes:
        model: O modelo do Gurobi.
        x: Variáveis binárias dos pedidos (1 se o pedido for selecionado).
        y: Variáveis binárias dos corredores (1 se o corredor for visitado).
        n_units: Total de unidades na wave (N).
        n_aisles: Número de corredores visitados (D).
        z: Variável contínua que substitui o ratio N / D no objetivo.
    """
    model: gp.Model
    x: gp.tupledict
    y: gp.tupledict
    n_units: gp.Var
    n_aisles: gp.Var
    z: gp.Var

    @property
    def num_orders(self) -> int:
        return len(self.x)

    @property
    def num_aisles(self) -> int:
        return len(self.y)

    def dispose(self):
        self.model.dispose()


def build_formulation(instance: Instance, name: str = "Optimal_Order_Selection",
                      env: gp.Env = None) -> WaveFormulation:
    """
    Constrói o modelo matemático (variáveis, restrições e objetivo) para uma
    instância. Não altera a instância.

    A restrição de inventário é gerada apenas para os itens que aparecem em
    algum pedido ou corredor, somando somente os pares (pedido, item) e
    (corredor, item) existentes.

    O objetivo N / D é substituído por max Z sujeito a
    Z - N + UB * D <= UB * |corredores|. Esse corte é um limitante, não uma
    reformulação exata do ratio; o valor reportado ao usuário é sempre
    recalculado a partir da solução.
    """
    logger.info("Iniciando a construção do modelo matemático...")
    model = gp.Model(name, env=env)
    try:
        return _populate_model(model, instance)
    except gp.GurobiError:
        model.dispose()
        raise


def _populate_model(model: gp.Model, instance: Instance) -> WaveFormulation:
    order_ids = range(instance.num_orders)
    aisle_ids = range(instance.num_aisles)
    ub = instance.max_wave_size

    # --- 1. VARIÁVEIS DE DECISÃO ---
    x = model.addVars(order_ids, vtype=GRB.BINARY, name="x")
    y = model.addVars(aisle_ids, vtype=GRB.BINARY, name="y")
    n_units = model.addVar(lb=instance.min_wave_size, ub=ub, vtype=GRB.INTEGER, name="N")
    n_aisles = model.addVar(lb=1, ub=instance.num_aisles, vtype=GRB.INTEGER, name="D")
    z = model.addVar(lb=0.0, ub=GRB.INFINITY, vtype=GRB.CONTINUOUS, name="Z")

    # --- 2. RESTRIÇÕES ---
    orders_by_item = instance.orders_by_item
    aisles_by_item = instance.item_locations

    # a) Suficiência de inventário por item.
    for item_id in sorted(orders_by_item.keys() | aisles_by_item.keys()):
        demand = gp.quicksum(
            instance.orders[o_id].items[item_id] * x[o_id] for o_id in orders_by_item.get(item_id, [])
        )
        supply = gp.quicksum(
            instance.aisles[a_id].inventory[item_id] * y[a_id] for a_id in aisles_by_item.get(item_id, [])
        )
        model.addConstr(demand - supply <= 0, f"inventory_sufficiency_{item_id}")

    # b) D é o número de corredores visitados.
    model.addConstr(y.sum() == n_aisles, "aisle_count")

    # c) N é o total de unidades dos pedidos selecionados.
    total_units_in_wave = gp.quicksum(order.total_units * x[order.id] for order in instance.orders)
    model.addConstr(total_units_in_wave == n_units, "wave_units")

    # d) Linearização do objetivo.
    model.addConstr(z - n_units + ub * n_aisles <= ub * instance.num_aisles, "obj_linearization")

    # --- 3. FUNÇÃO OBJETIVO ---
    model.setObjective(z, GRB.MAXIMIZE)
    model.update()

    logger.info(
        f"Modelo construído: {model.NumVars} variáveis, {model.NumConstrs} restrições "
        f"({len(orders_by_item.keys() | aisles_by_item.keys())} itens com inventário/demanda)."
    )
    return WaveFormulation(model=model, x=x, y=y, n_units=n_units, n_aisles=n_aisles, z=z)
