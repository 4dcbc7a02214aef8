# -*- coding: utf-8 -*-
# ARQUIVO: model.py

from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Tuple

from wave_picking.errors import ModelConstructionError


def _check_quantities(kind: str, owner_id: int, entries: Mapping[int, int], num_items: int):
    for item_id, quantity in entries.items():
        if not isinstance(item_id, int) or not 0 <= item_id < num_items:
            raise ModelConstructionError(
                f"{kind} {owner_id}: item {item_id} fora do intervalo [0, {num_items})."
            )
        if not isinstance(quantity, int) or quantity < 0:
            raise ModelConstructionError(
                f"{kind} {owner_id}: quantidade inválida {quantity!r} para o item {item_id}."
            )


@dataclass(frozen=True)
class Order:
    """
    Representa um único pedido.

    Attributes:
        id (int): Posição do pedido na instância.
        items (Mapping[int, int]): ID do item -> quantidade solicitada.
        total_units (int): Número total de unidades do pedido.
    """
    id: int
    items: Mapping[int, int]
    total_units: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'items', MappingProxyType(dict(self.items)))
        object.__setattr__(self, 'total_units', sum(self.items.values()))


@dataclass(frozen=True)
class Aisle:
    """
    Representa um corredor no armazém.

    Attributes:
        id (int): Posição do corredor na instância.
        inventory (Mapping[int, int]): ID do item -> quantidade disponível.
    """
    id: int
    inventory: Mapping[int, int]

    def __post_init__(self):
        object.__setattr__(self, 'inventory', MappingProxyType(dict(self.inventory)))


class WaveBounds(NamedTuple):
    lower: int
    upper: int

    def contains(self, units: int) -> bool:
        return self.lower <= units <= self.upper


@dataclass(frozen=True)
class Instance:
    """
    Armazena todos os dados de uma instância do problema. Imutável: os
    índices reversos item -> pedidos/corredores são calculados uma única vez,
    sob demanda.
    """
    orders: Tuple[Order, ...]
    aisles: Tuple[Aisle, ...]
    num_items: int
    min_wave_size: int
    max_wave_size: int

    def __post_init__(self):
        object.__setattr__(self, 'orders', tuple(self.orders))
        object.__setattr__(self, 'aisles', tuple(self.aisles))

        if self.min_wave_size < 0 or self.max_wave_size < 0:
            raise ModelConstructionError(
                f"Limites da wave devem ser não negativos: LB={self.min_wave_size}, UB={self.max_wave_size}."
            )
        if self.min_wave_size > self.max_wave_size:
            raise ModelConstructionError(
                f"LB={self.min_wave_size} maior que UB={self.max_wave_size}."
            )

        for position, order in enumerate(self.orders):
            if order.id != position:
                raise ModelConstructionError(f"Pedido na posição {position} tem id {order.id}.")
            _check_quantities("Pedido", order.id, order.items, self.num_items)
        for position, aisle in enumerate(self.aisles):
            if aisle.id != position:
                raise ModelConstructionError(f"Corredor na posição {position} tem id {aisle.id}.")
            _check_quantities("Corredor", aisle.id, aisle.inventory, self.num_items)

    @classmethod
    def from_mappings(cls, orders: Iterable[Mapping[int, int]], aisles: Iterable[Mapping[int, int]],
                      num_items: int, min_wave_size: int, max_wave_size: int) -> 'Instance':
        """Constrói a instância a partir de listas de dicionários item -> quantidade."""
        return cls(
            orders=tuple(Order(id=i, items=items) for i, items in enumerate(orders)),
            aisles=tuple(Aisle(id=j, inventory=inventory) for j, inventory in enumerate(aisles)),
            num_items=num_items,
            min_wave_size=min_wave_size,
            max_wave_size=max_wave_size,
        )

    @property
    def num_orders(self) -> int:
        return len(self.orders)

    @property
    def num_aisles(self) -> int:
        return len(self.aisles)

    @property
    def bounds(self) -> WaveBounds:
        return WaveBounds(self.min_wave_size, self.max_wave_size)

    @cached_property
    def orders_by_item(self) -> Dict[int, List[int]]:
        """Mapeamento reverso: item -> pedidos que o solicitam."""
        orders_by_item: Dict[int, List[int]] = {}
        for order in self.orders:
            for item_id, quantity in order.items.items():
                if quantity > 0:
                    orders_by_item.setdefault(item_id, []).append(order.id)
        return orders_by_item

    @cached_property
    def item_locations(self) -> Dict[int, List[int]]:
        """Mapeamento reverso: item -> corredores que o estocam."""
        item_locations: Dict[int, List[int]] = {}
        for aisle in self.aisles:
            for item_id, quantity in aisle.inventory.items():
                if quantity > 0:
                    item_locations.setdefault(item_id, []).append(aisle.id)
        return item_locations


@dataclass(frozen=True)
class WaveSolution:
    """Pedidos selecionados e corredores visitados de uma wave."""
    orders: FrozenSet[int]
    aisles: FrozenSet[int]

    def __post_init__(self):
        object.__setattr__(self, 'orders', frozenset(self.orders))
        object.__setattr__(self, 'aisles', frozenset(self.aisles))

    @property
    def is_empty(self) -> bool:
        return not self.orders or not self.aisles
