# -*- coding: utf-8 -*-
# ARQUIVO: data_parser.py

import logging
from typing import Dict, List

from wave_picking.errors import ModelConstructionError
from wave_picking.model import Aisle, Instance, Order, WaveSolution

logger = logging.getLogger(__name__)


def _parse_pairs(line: str, line_number: int) -> Dict[int, int]:
    try:
        parts = list(map(int, line.split()))
    except ValueError as e:
        raise ModelConstructionError(f"Linha {line_number}: valor não inteiro. Detalhes: {e}")
    if not parts or len(parts[1:]) != 2 * parts[0]:
        raise ModelConstructionError(f"Formato incorreto na linha {line_number}.")
    data = parts[1:]
    entries: Dict[int, int] = {}
    for i in range(parts[0]):
        item_id, quantity = data[2 * i], data[2 * i + 1]
        entries[item_id] = entries.get(item_id, 0) + quantity
    return entries


class InstanceParser:
    """
    Responsável por ler um arquivo de instância e carregar seus dados
    em um objeto `Instance`.
    """
    @staticmethod
    def parse(file_path: str) -> Instance:
        """
        Lê um arquivo de instância e retorna um objeto Instance populado.

        Formato: cabeçalho `pedidos itens corredores`, uma linha por pedido
        (`k item qtd ...`), uma linha por corredor no mesmo formato e, por
        fim, a linha `LB UB`.

        Raises:
            FileNotFoundError: Se o caminho do arquivo não for encontrado.
            ModelConstructionError: Se o arquivo tiver um formato inesperado.
        """
        logger.info(f"Iniciando o parsing do arquivo: {file_path}")

        with open(file_path, 'r') as f:
            lines = [line for line in f.read().splitlines() if line.strip()]

        # 1. Cabeçalho
        try:
            num_orders, num_items, num_aisles = map(int, lines[0].split())
        except (ValueError, IndexError) as e:
            raise ModelConstructionError(f"Erro ao ler o cabeçalho do arquivo. Detalhes: {e}")
        logger.info(f"Cabeçalho lido: {num_orders} pedidos, {num_items} itens, {num_aisles} corredores.")

        expected_lines = 1 + num_orders + num_aisles + 1
        if len(lines) < expected_lines:
            raise ModelConstructionError(
                f"Arquivo terminou inesperadamente: esperadas {expected_lines} linhas, lidas {len(lines)}."
            )

        # 2. Pedidos
        orders: List[Order] = []
        for order_id in range(num_orders):
            line_index = 1 + order_id
            orders.append(Order(id=order_id, items=_parse_pairs(lines[line_index], line_index + 1)))
        logger.info(f"{len(orders)} pedidos lidos.")

        # 3. Corredores
        aisles: List[Aisle] = []
        for aisle_id in range(num_aisles):
            line_index = 1 + num_orders + aisle_id
            aisles.append(Aisle(id=aisle_id, inventory=_parse_pairs(lines[line_index], line_index + 1)))
        logger.info(f"{len(aisles)} corredores lidos.")

        # 4. Limites da wave
        limits_index = 1 + num_orders + num_aisles
        try:
            min_wave_size, max_wave_size = map(int, lines[limits_index].split())
        except ValueError as e:
            raise ModelConstructionError(f"Linha de limites da wave inválida. Detalhes: {e}")
        logger.info(f"Limites da wave lidos: LB={min_wave_size}, UB={max_wave_size}.")

        return Instance(
            orders=tuple(orders),
            aisles=tuple(aisles),
            num_items=num_items,
            min_wave_size=min_wave_size,
            max_wave_size=max_wave_size,
        )


class SolutionWriter:
    """Lê e escreve soluções no formato do desafio."""

    @staticmethod
    def write(solution: WaveSolution, output_path: str):
        """
        Primeira linha: número de pedidos na wave; depois um índice por linha.
        Em seguida o número de corredores visitados e um índice por linha.
        """
        logger.info(f"Salvando solução em '{output_path}'...")
        with open(output_path, 'w') as f:
            f.write(f"{len(solution.orders)}\n")
            for order_id in sorted(solution.orders):
                f.write(f"{order_id}\n")
            f.write(f"{len(solution.aisles)}\n")
            for aisle_id in sorted(solution.aisles):
                f.write(f"{aisle_id}\n")
        logger.info("Arquivo de solução salvo com sucesso.")

    @staticmethod
    def read(input_path: str) -> WaveSolution:
        with open(input_path, 'r') as f:
            values = [int(line) for line in f.read().split()]
        num_orders = values[0]
        orders = values[1:1 + num_orders]
        num_aisles = values[1 + num_orders]
        aisles = values[2 + num_orders:2 + num_orders + num_aisles]
        return WaveSolution(orders=frozenset(orders), aisles=frozenset(aisles))
