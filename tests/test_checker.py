import random

import pytest

from wave_picking.checker import compute_objective_function, find_violation, is_solution_feasible
from wave_picking.model import Instance, WaveSolution


def _brute_force_feasible(orders, aisles, num_items, lb, ub, selected_orders, visited_aisles):
    if not selected_orders or not visited_aisles:
        return False
    picked = [0] * num_items
    available = [0] * num_items
    for o in selected_orders:
        for item, qty in orders[o].items():
            picked[item] += qty
    for a in visited_aisles:
        for item, qty in aisles[a].items():
            available[item] += qty
    if not lb <= sum(picked) <= ub:
        return False
    return all(picked[i] <= available[i] for i in range(num_items))


def _random_mappings(rng, count, num_items, max_lines, max_qty):
    mappings = []
    for _ in range(count):
        items = rng.sample(range(num_items), rng.randint(1, min(max_lines, num_items)))
        mappings.append({item: rng.randint(1, max_qty) for item in items})
    return mappings


def test_scenario_a_single_order_single_aisle():
    instance = Instance.from_mappings([{0: 5}], [{0: 5}], 1, 1, 10)
    solution = WaveSolution(orders={0}, aisles={0})
    assert is_solution_feasible(instance, solution)
    assert compute_objective_function(instance, solution) == 5.0


def test_scenario_b_insufficient_stock():
    instance = Instance.from_mappings([{0: 5}], [{0: 3}], 1, 1, 10)
    solution = WaveSolution(orders={0}, aisles={0})
    assert not is_solution_feasible(instance, solution)
    assert "Item 0" in find_violation(instance, solution)


def test_scenario_c_wave_size_band():
    instance = Instance.from_mappings([{0: 4}, {0: 6}], [{0: 10}], 1, 5, 8)
    only_large = WaveSolution(orders={1}, aisles={0})
    both = WaveSolution(orders={0, 1}, aisles={0})
    only_small = WaveSolution(orders={0}, aisles={0})

    assert is_solution_feasible(instance, only_large)
    assert compute_objective_function(instance, only_large) == 6.0
    assert not is_solution_feasible(instance, both)
    assert not is_solution_feasible(instance, only_small)


@pytest.mark.parametrize("orders, aisles", [(set(), {0}), ({0}, set()), (set(), set())])
def test_empty_sides_are_rejected(orders, aisles):
    instance = Instance.from_mappings([{0: 1}], [{0: 100}], 1, 0, 100)
    solution = WaveSolution(orders=orders, aisles=aisles)
    assert not is_solution_feasible(instance, solution)
    assert compute_objective_function(instance, solution) == 0.0


def test_unknown_indices_are_rejected():
    instance = Instance.from_mappings([{0: 1}], [{0: 1}], 1, 0, 10)
    assert not is_solution_feasible(instance, WaveSolution(orders={3}, aisles={0}))
    assert not is_solution_feasible(instance, WaveSolution(orders={0}, aisles={1}))


def test_extra_aisles_lower_the_ratio():
    instance = Instance.from_mappings([{0: 6, 1: 2}], [{0: 6}, {1: 2}, {0: 1}], 2, 1, 20)
    assert compute_objective_function(instance, WaveSolution(orders={0}, aisles={0, 1})) == 4.0
    assert compute_objective_function(instance, WaveSolution(orders={0}, aisles={0, 1, 2})) == pytest.approx(8 / 3)


def test_validator_matches_brute_force():
    rng = random.Random(0)
    for _ in range(200):
        num_items = rng.randint(1, 8)
        orders = _random_mappings(rng, rng.randint(1, 6), num_items, 3, 5)
        aisles = _random_mappings(rng, rng.randint(1, 5), num_items, 4, 6)
        lb = rng.randint(0, 10)
        ub = lb + rng.randint(0, 15)
        instance = Instance.from_mappings(orders, aisles, num_items, lb, ub)

        selected = {o for o in range(len(orders)) if rng.random() < 0.5}
        visited = {a for a in range(len(aisles)) if rng.random() < 0.5}
        solution = WaveSolution(orders=selected, aisles=visited)

        expected = _brute_force_feasible(orders, aisles, num_items, lb, ub, selected, visited)
        assert is_solution_feasible(instance, solution) == expected

        if expected:
            units = sum(sum(orders[o].values()) for o in selected)
            assert lb <= units <= ub
            assert compute_objective_function(instance, solution) == pytest.approx(units / len(visited))


def test_checks_are_idempotent():
    instance = Instance.from_mappings([{0: 2, 1: 1}, {1: 3}], [{0: 2}, {1: 4}], 2, 1, 10)
    solution = WaveSolution(orders={0, 1}, aisles={0, 1})
    assert is_solution_feasible(instance, solution) == is_solution_feasible(instance, solution)
    assert compute_objective_function(instance, solution) == compute_objective_function(instance, solution)
    assert compute_objective_function(instance, solution) == 3.0


def test_random_mappings_fit_small_catalogs():
    rng = random.Random(0)
    mappings = _random_mappings(rng, 20, 1, 4, 6)
    assert all(list(m) == [0] for m in mappings)
