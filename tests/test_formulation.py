from gurobipy import GRB

from wave_picking.formulation import build_formulation
from wave_picking.model import Instance


def _row(formulation, name):
    model = formulation.model
    constr = model.getConstrByName(name)
    row = model.getRow(constr)
    coefficients = {row.getVar(k).VarName: row.getCoeff(k) for k in range(row.size())}
    return constr, coefficients


def test_variables_and_domains():
    instance = Instance.from_mappings([{0: 2}, {1: 3}], [{0: 2, 1: 3}, {1: 1}, {0: 1}], 2, 2, 9)
    formulation = build_formulation(instance)
    try:
        assert formulation.num_orders == 2
        assert formulation.num_aisles == 3
        assert all(v.VType == GRB.BINARY for v in formulation.x.values())
        assert all(v.VType == GRB.BINARY for v in formulation.y.values())

        assert formulation.n_units.VType == GRB.INTEGER
        assert (formulation.n_units.LB, formulation.n_units.UB) == (2, 9)
        assert formulation.n_aisles.VType == GRB.INTEGER
        assert (formulation.n_aisles.LB, formulation.n_aisles.UB) == (1, 3)
        assert formulation.z.VType == GRB.CONTINUOUS
        assert formulation.z.LB == 0.0
        assert formulation.z.UB >= GRB.INFINITY

        assert formulation.model.ModelSense == GRB.MAXIMIZE
        assert formulation.model.getObjective().getVar(0).VarName == "Z"
    finally:
        formulation.dispose()


def test_inventory_constraints_only_for_touched_items():
    instance = Instance.from_mappings(
        orders=[{3: 2, 7: 0}, {3: 1}],
        aisles=[{3: 4}, {9: 5}],
        num_items=100,
        min_wave_size=0,
        max_wave_size=10,
    )
    formulation = build_formulation(instance)
    try:
        names = [c.ConstrName for c in formulation.model.getConstrs()]
        inventory = sorted(n for n in names if n.startswith("inventory_sufficiency_"))
        assert inventory == ["inventory_sufficiency_3", "inventory_sufficiency_9"]

        constr, coefficients = _row(formulation, "inventory_sufficiency_3")
        assert constr.Sense == GRB.LESS_EQUAL
        assert constr.RHS == 0.0
        assert coefficients == {"x[0]": 2.0, "x[1]": 1.0, "y[0]": -4.0}

        _, coefficients = _row(formulation, "inventory_sufficiency_9")
        assert coefficients == {"y[1]": -5.0}
    finally:
        formulation.dispose()


def test_linking_constraints_and_ratio_cut():
    instance = Instance.from_mappings([{0: 2, 1: 1}, {1: 4}], [{0: 2}, {1: 5}], 2, 1, 8)
    formulation = build_formulation(instance)
    try:
        constr, coefficients = _row(formulation, "aisle_count")
        assert constr.Sense == GRB.EQUAL
        assert constr.RHS == 0.0
        assert coefficients == {"y[0]": 1.0, "y[1]": 1.0, "D": -1.0}

        constr, coefficients = _row(formulation, "wave_units")
        assert constr.Sense == GRB.EQUAL
        assert coefficients == {"x[0]": 3.0, "x[1]": 4.0, "N": -1.0}

        constr, coefficients = _row(formulation, "obj_linearization")
        assert constr.Sense == GRB.LESS_EQUAL
        assert constr.RHS == 8 * 2
        assert coefficients == {"Z": 1.0, "N": -1.0, "D": 8.0}
    finally:
        formulation.dispose()


def test_each_call_builds_an_independent_model():
    instance = Instance.from_mappings([{0: 1}], [{0: 1}], 1, 1, 1)
    first = build_formulation(instance)
    second = build_formulation(instance)
    try:
        assert first.model is not second.model
        assert first.model.NumVars == second.model.NumVars == 1 + 1 + 3
        assert first.model.NumConstrs == 1 + 3
    finally:
        first.dispose()
        second.dispose()
