"""Tests for the simulation engine — scenarios, daily waterfall, interest lag, drag."""
import pytest

from cashpool.models.simulation import PoolKey, ScenarioKind
from cashpool.simulation.engine import run_simulation
from cashpool.simulation.pools import AVERAGE_EXPECTED_RETURN, daily_rate
from cashpool.simulation.scenarios import (
    BASELINE_CASH_POOL_NOTIONAL,
    drag_adjustment_for,
    facility_sizing_drag,
    get_scenario,
    list_scenarios,
)
from cashpool.simulation.validation import ConfigurationError

RATE = 4.25 / 100 / 365


def _no_adjustment(params):
    return 0.0


# --- Scenario tests ---


def test_list_scenarios_in_display_order():
    kinds = [s.kind for s in list_scenarios()]
    assert kinds == [ScenarioKind.prefunded, ScenarioKind.internal, ScenarioKind.loc]


def test_prefunded_preset_funds_every_pool():
    s = get_scenario("prefunded")
    assert s.params.pe_cash == 30.0
    assert s.params.pc_cash == 30.0
    assert s.params.pre_cash == 30.0
    assert s.params.cash_pool == 0.0


def test_internal_preset_is_baseline():
    s = get_scenario(ScenarioKind.internal)
    assert s.params.cash_pool == 50.0
    assert s.params.borrow_rate == 4.25
    assert s.params.idle_rate == 4.25
    assert s.params.days == 30


def test_loc_preset_charges_spread_over_cash_rate():
    s = get_scenario("loc")
    assert s.params.borrow_rate == pytest.approx(4.65)
    assert s.params.idle_rate == 4.25
    assert s.params.cash_pool == 0.0


def test_unknown_scenario_is_rejected():
    with pytest.raises(ConfigurationError):
        get_scenario("nonexistent_scenario")


def test_only_internal_has_drag_adjustment():
    assert drag_adjustment_for("internal") is facility_sizing_drag
    assert drag_adjustment_for("prefunded") is None
    assert drag_adjustment_for("loc") is None


def test_facility_sizing_drag_uses_baseline_notional(make_params):
    expected = BASELINE_CASH_POOL_NOTIONAL * daily_rate(AVERAGE_EXPECTED_RETURN - 4.25)
    # The run's own cash pool balance does not change the adjustment
    assert facility_sizing_drag(make_params(cash_pool=0.0)) == pytest.approx(expected)
    assert facility_sizing_drag(make_params(cash_pool=500.0)) == pytest.approx(expected)


def test_facility_sizing_drag_zero_when_idle_rate_beats_returns(make_params):
    assert facility_sizing_drag(make_params(idle_rate=9.0)) == 0.0
    assert facility_sizing_drag(make_params(idle_rate=AVERAGE_EXPECTED_RETURN)) == 0.0


# --- Single-day engine tests ---


def test_capital_call_draws_from_cash_pool(make_params):
    params = make_params()
    result = run_simulation(params, [{"PE": -5, "PC": 0, "PRE": 0}], ScenarioKind.loc)

    record = result.records[0]
    pe = record.pool(PoolKey.PE)
    assert record.day == 1
    assert pe.cash == 0.0
    assert pe.borrow == pytest.approx(5.0)
    assert pe.interest_owed == pytest.approx(5 * RATE)
    assert pe.interest_owed == pytest.approx(0.0005822, abs=1e-7)
    assert pe.interest_paid == 0.0
    assert record.cash_pool.cash == pytest.approx(45.0)
    assert record.totals.borrowed == pytest.approx(5.0)
    assert record.totals.repaid == 0.0
    assert record.totals.drag == pytest.approx(5 * RATE)
    assert record.activity["PE"] == -5
    assert record.activity["CP"] == pytest.approx(-5.0)


def test_internal_scenario_adds_facility_drag(make_params):
    params = make_params()
    result = run_simulation(params, [{"PE": -5}], ScenarioKind.internal)
    record = result.records[0]
    facility = 50.0 * (7.8 - 4.25) / 100 / 365
    assert record.cash_pool.cash_drag == pytest.approx(facility)
    assert record.totals.drag == pytest.approx(5 * RATE + facility)


def test_injected_adjustment_overrides_scenario(make_params):
    params = make_params()
    result = run_simulation(params, [{"PE": -5}], ScenarioKind.internal, drag_adjustment=_no_adjustment)
    assert result.records[0].cash_pool.cash_drag == 0.0
    assert result.records[0].totals.drag == pytest.approx(5 * RATE)


def test_custom_adjustment_is_booked_daily(make_params):
    params = make_params(days=3)
    result = run_simulation(params, [], ScenarioKind.loc, drag_adjustment=lambda p: 0.01)
    assert [r.totals.drag for r in result.records] == pytest.approx([0.01, 0.01, 0.01])
    assert result.records[-1].cash_pool.cash_drag == pytest.approx(0.03)


def test_cash_pool_interest_receivable_tracks_outstanding_borrow(make_params):
    params = make_params()
    result = run_simulation(params, [{"PE": -5, "PC": -2}], ScenarioKind.loc)
    record = result.records[0]
    assert record.cash_pool.interest_receivable == pytest.approx(7 * RATE)
    # Receivable accrual plus idle interest on the remaining 43
    assert record.totals.interest_by_pool["CP"] == pytest.approx(7 * RATE + 43 * RATE)


def test_cash_pool_can_go_negative_when_unfunded(make_params):
    params = make_params(cash_pool=0.0)
    result = run_simulation(params, [{"PRE": -4}], ScenarioKind.loc)
    record = result.records[0]
    assert record.cash_pool.cash == pytest.approx(-4.0)
    assert record.cash_pool.interest_earned == 0.0


def test_zero_event_day_with_empty_pools_has_zero_totals(make_params):
    params = make_params(cash_pool=0.0)
    result = run_simulation(params, [{"PE": 0, "PC": 0, "PRE": 0}], ScenarioKind.prefunded)
    totals = result.records[0].totals
    assert totals.borrowed == 0.0
    assert totals.repaid == 0.0
    assert totals.drag == 0.0


# --- Multi-day behaviour ---


def test_idle_interest_credited_next_day(make_params):
    params = make_params(pe_cash=10.0, cash_pool=0.0, days=2)
    result = run_simulation(params, [], ScenarioKind.prefunded)
    day1, day2 = result.records

    assert day1.pool("PE").cash == 10.0
    assert day1.pool("PE").interest_earned == pytest.approx(10 * RATE)
    assert day2.pool("PE").cash == pytest.approx(10 + 10 * RATE)
    assert day2.pool("PE").interest_earned == pytest.approx((10 + 10 * RATE) * RATE)


def test_cash_pool_idle_interest_credited_next_day(make_params):
    params = make_params(days=2)
    result = run_simulation(params, [], ScenarioKind.loc)
    day1, day2 = result.records
    assert day1.cash_pool.cash == 50.0
    assert day1.cash_pool.interest_earned == pytest.approx(50 * RATE)
    assert day2.cash_pool.cash == pytest.approx(50 + 50 * RATE)
    assert result.summary.cash_pool.interest_earned == pytest.approx(
        day1.cash_pool.interest_earned + day2.cash_pool.interest_earned
    )


def test_waterfall_pays_interest_before_principal(make_params):
    params = make_params(days=2)
    result = run_simulation(params, [{"PE": -5}, {"PE": 3}], ScenarioKind.loc)
    pe = result.records[1].pool("PE")

    interest_due = 10 * RATE  # two days of interest on 5
    assert pe.interest_paid == pytest.approx(interest_due)
    assert pe.interest_owed == 0.0
    assert pe.borrow == pytest.approx(5 - (3 - interest_due))
    assert pe.cash == 0.0
    assert result.records[1].totals.repaid == pytest.approx(3.0)
    assert result.records[1].activity["CP"] == pytest.approx(3.0)


def test_distribution_larger_than_debt_leaves_cash(make_params):
    params = make_params(days=2)
    result = run_simulation(params, [{"PC": -2}, {"PC": 6}], ScenarioKind.loc)
    pc = result.records[1].pool("PC")
    paid = 2 + 4 * RATE
    assert pc.borrow == 0.0
    assert pc.interest_owed == 0.0
    assert pc.cash == pytest.approx(6 - paid)
    assert pc.interest_earned == pytest.approx((6 - paid) * RATE)
    assert result.records[1].totals.repaid == pytest.approx(paid)


def test_cash_drag_on_idle_pool_cash(make_params):
    params = make_params(pe_cash=10.0, cash_pool=0.0)
    result = run_simulation(params, [], ScenarioKind.prefunded)
    pe = result.records[0].pool("PE")
    assert pe.cash_drag == pytest.approx(10 * (8.0 - 4.25) / 100 / 365)
    assert result.records[0].totals.drag == pytest.approx(pe.cash_drag)


def test_no_cash_drag_when_idle_rate_exceeds_expected_return(make_params):
    params = make_params(pre_cash=10.0, cash_pool=0.0, idle_rate=7.5)
    result = run_simulation(params, [], ScenarioKind.prefunded)
    # PRE targets 7.2%, below the idle rate
    assert result.records[0].pool("PRE").cash_drag == 0.0


def test_pool_interest_figure_nets_idle_interest(make_params):
    params = make_params(pe_cash=10.0, cash_pool=0.0)
    result = run_simulation(params, [], ScenarioKind.prefunded)
    assert result.records[0].totals.interest_by_pool["PE"] == pytest.approx(-10 * RATE)


def test_short_event_sequence_is_padded(make_params):
    params = make_params(days=5)
    result = run_simulation(params, [{"PE": -1}, None], ScenarioKind.loc)
    assert [r.day for r in result.records] == [1, 2, 3, 4, 5]
    assert result.records[1].activity["PE"] == 0.0
    assert result.records[4].activity.model_dump() == {"PE": 0.0, "PC": 0.0, "PRE": 0.0, "CP": 0.0}


def test_extra_events_beyond_horizon_are_ignored(make_params):
    params = make_params(days=1)
    result = run_simulation(params, [{"PE": -1}, {"PE": -100}], ScenarioKind.loc)
    assert len(result.records) == 1
    assert result.summary.totals.borrowed == pytest.approx(1.0)


# --- Summary ---


def test_summary_reports_ending_state(make_params):
    params = make_params(days=3)
    events = [{"PE": -5}, {"PC": -2}, {"PE": 1}]
    result = run_simulation(params, events, ScenarioKind.loc)
    summary = result.summary
    last = result.records[-1]

    assert summary.totals.days == 3
    assert summary.totals.borrowed == pytest.approx(7.0)
    assert summary.totals.repaid == pytest.approx(1.0)
    assert summary.cash_pool.ending_cash == last.cash_pool.cash
    for pool_summary, pool_state in zip(summary.pools, last.pools):
        assert pool_summary.key == pool_state.key
        assert pool_summary.ending_cash == pool_state.cash
        assert pool_summary.ending_borrow == pool_state.borrow
        assert pool_summary.interest_paid == pool_state.interest_paid


def test_result_carries_scenario_and_params(make_params):
    params = make_params(days=2)
    result = run_simulation(params, [], "prefunded")
    assert result.scenario == ScenarioKind.prefunded
    assert result.params == params
