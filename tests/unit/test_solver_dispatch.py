# tests/unit/test_solver_dispatch.py
import pytest

from fincalc.core.errors import InvalidInputError
from fincalc.core.finance import compound_interest, formula_template, required_knowns, simple_interest, solve
from fincalc.schemas.models import FinancialInputSet, InterestModel, Variable


@pytest.mark.parametrize("module", [simple_interest, compound_interest])
def test_every_variable_has_a_solver_and_formula(module):
    assert set(module.SOLVERS) == set(Variable)
    assert set(module.FORMULAS) == set(Variable)


def test_solve_accepts_plain_mapping_and_strings():
    res = solve("M", {"C": 1000, "i": 0.1, "n": 5, "m": 1}, "compound")
    assert res.model is InterestModel.COMPOUND
    assert res.value == pytest.approx(1610.51)


def test_solve_accepts_enum_keys():
    res = solve(Variable.INTEREST, {Variable.CAPITAL: 1000, Variable.RATE: 0.05, Variable.TIME: 2})
    assert res.value == pytest.approx(100.0)


def test_unknown_variable_is_invalid_input():
    with pytest.raises(InvalidInputError, match="unknown variable"):
        solve("x", {"C": 1})


def test_unknown_model_is_invalid_input():
    with pytest.raises(InvalidInputError, match="interest model"):
        solve("I", {"C": 1, "i": 0.1, "n": 1}, "continuous")


def test_formula_template_simple_lists_alternatives():
    assert formula_template("n") == "n = I / (C × i) or n = (M − C) / (C × i)"


def test_formula_template_compound_interest_chains_both_forms():
    assert formula_template("I", "compound") == "I = M − C = C × [(1 + i/m)^(m × n) − 1]"


def test_required_knowns_follows_supplied_values():
    C, i, n, I, M = Variable
    assert required_knowns("C", {"I": 100}) == (i, n, I)
    assert required_knowns("C", {"M": 1100}) == (i, n, M)
    assert required_knowns("I", FinancialInputSet(C=1, M=2)) == (C, M)
    assert required_knowns("I", FinancialInputSet(C=1)) == (C, i, n)
    assert required_knowns("n", {}, "compound") == (M, C, i)


def test_required_knowns_ignores_value_of_the_unknown():
    # I supplied for the unknown itself must not flip the branch choice
    assert required_knowns("I", {"I": 5, "C": 1}) == (Variable.CAPITAL, Variable.RATE, Variable.TIME)


def test_compound_required_knowns_leave_frequency_implied():
    C, i, n, I, M = Variable
    assert required_knowns("M", {"m": 12}, "compound") == (C, i, n)
    assert required_knowns("I", {"C": 1, "M": 2}, "compound") == (M, C)
