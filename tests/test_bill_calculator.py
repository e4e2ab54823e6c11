"""Tests for the pure bill calculation functions."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from services.bill_calculator import (
    BillCharges,
    ItemizedCharges,
    LineItem,
    MeterReading,
    ScalarCharge,
    apply_to_bill,
    as_charge,
    calculate_bill,
    charge_total,
    to_decimal,
    utility_cost,
)


def _charges(**overrides) -> BillCharges:
    values = dict(
        rent=Decimal("10000"),
        electricity=MeterReading(Decimal("100"), Decimal("150"), Decimal("7"), Decimal("50")),
        water=MeterReading(Decimal("50"), Decimal("70"), Decimal("15"), Decimal("50")),
        discounts=ScalarCharge(Decimal("500")),
        aircon_fee=Decimal("300"),
        fridge_fee=Decimal("0"),
        other_fees=ScalarCharge(Decimal("200")),
    )
    values.update(overrides)
    return BillCharges(**values)


class TestCalculateBill:

    def test_reference_bill(self):
        totals = calculate_bill(_charges())

        assert totals.net_rent == Decimal("9500.00")
        assert totals.electricity_cost == Decimal("400.00")
        assert totals.water_cost == Decimal("350.00")
        assert totals.other_fees_total == Decimal("200.00")
        assert totals.discount_total == Decimal("500.00")
        assert totals.grand_total == Decimal("10750.00")

    def test_same_input_same_output(self):
        assert calculate_bill(_charges()) == calculate_bill(_charges())

    def test_grand_total_is_sum_of_components(self):
        charges = _charges(
            electricity=MeterReading(Decimal("10.5"), Decimal("33.25"), Decimal("4.3333"), Decimal("0")),
            aircon_fee=Decimal("99.99"),
            fridge_fee=Decimal("45.5"),
        )
        totals = calculate_bill(charges)

        assert totals.grand_total == (
            totals.net_rent
            + totals.electricity_cost
            + totals.water_cost
            + Decimal("99.99")
            + Decimal("45.50")
            + totals.other_fees_total
        )
        assert totals.grand_total == totals.grand_total.quantize(Decimal("0.01"))

    def test_itemized_and_scalar_discounts_agree(self):
        itemized = _charges(discounts=ItemizedCharges((
            LineItem("Loyalty", Decimal("300")),
            LineItem("Late move-in", Decimal("200")),
        )))
        scalar = _charges(discounts=ScalarCharge(Decimal("500")))

        assert calculate_bill(itemized).net_rent == calculate_bill(scalar).net_rent
        assert calculate_bill(itemized).grand_total == calculate_bill(scalar).grand_total

    def test_no_discounts_or_fees(self):
        totals = calculate_bill(_charges(discounts=ItemizedCharges(), other_fees=ScalarCharge()))

        assert totals.net_rent == Decimal("10000.00")
        assert totals.other_fees_total == Decimal("0.00")
        assert totals.grand_total == Decimal("11050.00")

    def test_discount_larger_than_rent_gives_negative_net_rent(self):
        totals = calculate_bill(_charges(rent=Decimal("100"), discounts=ScalarCharge(Decimal("500"))))

        assert totals.net_rent == Decimal("-400.00")

    def test_zero_usage_costs_only_the_meter_fee(self):
        reading = MeterReading(Decimal("80"), Decimal("80"), Decimal("7"), Decimal("50"))

        assert utility_cost(reading) == Decimal("50.00")

    def test_utility_cost_grows_with_usage(self):
        costs = [
            utility_cost(MeterReading(Decimal("100"), Decimal(end), Decimal("7"), Decimal("50")))
            for end in ("100", "110", "150", "400")
        ]

        assert costs == sorted(costs)

    def test_half_cent_rounds_up(self):
        # 1 unit at 0.125 = 0.125 -> 0.13
        reading = MeterReading(Decimal("0"), Decimal("1"), Decimal("0.125"), Decimal("0"))

        assert utility_cost(reading) == Decimal("0.13")

    def test_float_inputs_do_not_leak_binary_noise(self):
        totals = calculate_bill(_charges(
            rent=0.1 + 0.2,
            discounts=ScalarCharge(0),
            electricity=MeterReading(0, 0, 0),
            water=MeterReading(0, 0, 0),
            aircon_fee=0,
            other_fees=ScalarCharge(0),
        ))

        assert totals.net_rent == Decimal("0.30")


class TestChargeShapes:

    def test_none_is_zero(self):
        assert charge_total(as_charge(None)) == Decimal("0")

    def test_number_is_scalar(self):
        charge = as_charge(250)

        assert isinstance(charge, ScalarCharge)
        assert charge_total(charge) == Decimal("250")

    @pytest.mark.parametrize("entries", [
        [{"description": "Parking", "amount": "150"}, {"description": "Cleaning", "amount": 50}],
        [("Parking", 150), ("Cleaning", 50)],
        [SimpleNamespace(description="Parking", amount=150), SimpleNamespace(description="Cleaning", amount=50)],
    ])
    def test_itemized_shapes(self, entries):
        charge = as_charge(entries)

        assert isinstance(charge, ItemizedCharges)
        assert [item.description for item in charge.items] == ["Parking", "Cleaning"]
        assert charge_total(charge) == Decimal("200")

    def test_to_decimal_from_float_uses_shortest_repr(self):
        assert to_decimal(7.1) == Decimal("7.1")


class TestApplyToBill:

    def test_sets_derived_fields(self):
        bill = SimpleNamespace(
            rent=Decimal("10000"),
            electricity_start_meter=Decimal("100"),
            electricity_end_meter=Decimal("150"),
            electricity_rate=Decimal("7"),
            electricity_meter_fee=Decimal("50"),
            water_start_meter=Decimal("50"),
            water_end_meter=Decimal("70"),
            water_rate=Decimal("15"),
            water_meter_fee=Decimal("50"),
            aircon_fee=Decimal("300"),
            fridge_fee=Decimal("0"),
            discounts=[SimpleNamespace(description="Loyalty", amount=Decimal("500"))],
            other_fees=[SimpleNamespace(description="Cleaning", amount=Decimal("200"))],
        )

        totals = apply_to_bill(bill)

        assert bill.net_rent == Decimal("9500.00")
        assert bill.electricity_cost == Decimal("400.00")
        assert bill.water_cost == Decimal("350.00")
        assert bill.other_fees_total == Decimal("200.00")
        assert bill.grand_total == totals.grand_total == Decimal("10750.00")
